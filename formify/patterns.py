"""Built-in regular expression sources used by the pattern shortcut operators."""

from enum import Enum


class DefaultPattern(str, Enum):
    """Pattern sources for Email, PhoneNumber, UrlWithScheme and UrlNoScheme.

    The sources are matched against the whole value, never as a substring
    search, and must stay byte-for-byte stable so existing fixtures keep
    validating the same way.
    """

    EMAIL = r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"
    PHONE = (
        r"\+?([0-9]{1,3})?[-.\s]?(\(?[0-9]{1,4}\)?)?[-.\s]?[0-9]{1,4}"
        r"[-.\s]?[0-9]{1,4}[-.\s]?[0-9]{0,9}"
    )
    URL_WITH_SCHEME = r"[a-zA-Z]+:\/\/{1}[a-zA-Z0-9_\-.?=&\/]+"
    URL_NO_SCHEME = r"[a-zA-Z0-9-_.?=&\/]+"
