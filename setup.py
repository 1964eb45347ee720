from setuptools import setup, find_packages

setup(
    name="formify",
    version="0.1.0",
    description="Declarative form field validation with structured error codes",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        'formify': ['field-definitions.schema.yaml'],
    },
    include_package_data=True,
    install_requires=[
        'pyyaml>=6.0',
        'jsonschema>=4.17.0',
        'requests>=2.28.0',
        'regex>=2023.0',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    python_requires='>=3.9',
)
