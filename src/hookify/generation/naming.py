from __future__ import annotations

import re

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_PATH_PARAM = re.compile(r"\{([^}]+)\}")


def _words(value: str) -> list[str]:
    cleaned = []
    prev_separator = False
    for ch in value:
        if ch.isalnum():
            cleaned.append(ch)
            prev_separator = False
        elif not prev_separator:
            cleaned.append(" ")
            prev_separator = True
    # split lower→Upper boundaries so "findPetsByStatus" keeps its words
    spaced = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", "".join(cleaned))
    return [word for word in spaced.split() if word]


def pascal(value: str) -> str:
    """
    Example:
        >>> pascal("find-pets_by status")
        'FindPetsByStatus'
    """
    return "".join(word[:1].upper() + word[1:] for word in _words(value))


def camel(value: str) -> str:
    """
    Example:
        >>> camel("use-listPets")
        'useListPets'
    """
    name = pascal(value)
    if name and name[0].isdigit():
        name = f"_{name}"
    return name[:1].lower() + name[1:]


def operation_name(operation_id: str | None, verb: str, path: str) -> str:
    """Name the request function of an operation.

    Example:
        >>> operation_name(None, "get", "/users/{id}")
        'getUsersId'
    """
    if operation_id:
        return camel(operation_id)
    return camel(f"{verb} {path}")


def to_template_route(path: str) -> str:
    """Turn a path template into the body of a TypeScript template literal.

    Example:
        >>> to_template_route("/pets/{pet-id}")
        '/pets/${petId}'
    """
    return _PATH_PARAM.sub(lambda match: "${" + camel(match.group(1)) + "}", path)


def property_key(name: str) -> str:
    if _IDENTIFIER.match(name):
        return name
    return f"'{name}'"
