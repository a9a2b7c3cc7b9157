import re
from typing import Dict, Iterable, List, Set

_REPEATED_UNDERSCORES = re.compile(r"_+")


def sanitize_column_name(name: str) -> str:
    """Convert a free-form header into a snake_case identifier.

    An underscore is inserted before an uppercase letter or digit that follows
    a lowercase letter; spaces and dashes become underscores; anything else
    that is not a letter, digit or underscore is dropped.
    """
    result = []
    previous = ""
    for index, char in enumerate(name.strip()):
        if char.isalpha() or char.isdecimal() or char == "_":
            if index > 0 and (char.isupper() or char.isdecimal()) and previous.islower():
                result.append("_")
            result.append(char.lower())
        elif char.isspace() or char == "-":
            result.append("_")
        previous = char

    sanitized = _REPEATED_UNDERSCORES.sub("_", "".join(result))
    if sanitized and not (sanitized[0].isalpha() or sanitized[0] == "_"):
        sanitized = "_" + sanitized
    return sanitized


def deduplicate_names(names: Iterable[str]) -> List[str]:
    """Suffix repeated names with ``_<n>``, n counting occurrences beyond the first.

    ``["id", "id", "id"]`` -> ``["id", "id_1", "id_2"]``. A suffixed name that
    collides with a literal header keeps counting up.
    """
    counts: Dict[str, int] = {}
    used: Set[str] = set()
    unique = []
    for name in names:
        if name not in counts:
            counts[name] = 1
            candidate = name
        else:
            candidate = f"{name}_{counts[name]}"
            counts[name] += 1
            while candidate in used:
                candidate = f"{name}_{counts[name]}"
                counts[name] += 1
        used.add(candidate)
        unique.append(candidate)
    return unique
