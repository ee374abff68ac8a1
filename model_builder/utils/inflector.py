"""Word inflection helpers used when naming generated accessors."""

import re

_NAMESPACE_RE = re.compile(r"/(.?)")
_SEPARATOR_RE = re.compile(r"(?:^|_|-)+(.)")


def camelize(word: str) -> str:
    """Convert an underscored or dashed word to CamelCase.

    A ``/`` becomes a ``::`` namespace separator followed by an
    upper-cased character.

    >>> camelize("first_name")
    'FirstName'
    >>> camelize("admin/user_group")
    'Admin::UserGroup'
    """
    word = _NAMESPACE_RE.sub(lambda m: "::" + m.group(1).upper(), word)
    return _SEPARATOR_RE.sub(lambda m: m.group(1).upper(), word)
