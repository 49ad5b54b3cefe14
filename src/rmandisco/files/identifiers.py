"""Splitting shader identifiers into family, name and version."""


def split_identifier(identifier: str) -> tuple[str, str, tuple[int, int] | None]:
    """Split an identifier of the form family_name[_major[_minor]].

    Args:
        identifier: Shader identifier, usually the file stem

    Returns:
        (family, name, version). Version is None when the identifier has no
        trailing integer tokens; a lone major version implies minor 0.

    Raises:
        ValueError: If identifier is empty or has only version tokens
    """
    if not identifier:
        raise ValueError("Identifier is empty")

    tokens = identifier.split("_")
    family = tokens[0]

    if len(tokens) > 2 and tokens[-1].isdigit() and tokens[-2].isdigit():
        version = (int(tokens[-2]), int(tokens[-1]))
        name = "_".join(tokens[:-2])
    elif len(tokens) > 1 and tokens[-1].isdigit():
        version = (int(tokens[-1]), 0)
        name = "_".join(tokens[:-1])
    else:
        version = None
        name = identifier

    if not name:
        raise ValueError(f"Identifier has no name: {identifier!r}")

    return family, name, version
