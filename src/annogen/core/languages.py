from pathlib import Path

_EXTENSION_LANGUAGE_MAP = {
    ".c": "cpp",
    ".cc": "cpp",
    ".cpp": "cpp",
    ".cxx": "cpp",
    ".h": "cpp",
    ".hh": "cpp",
    ".hpp": "cpp",
    ".hxx": "cpp",
    ".inl": "cpp",
}

HEADER_EXTENSIONS: frozenset[str] = frozenset({".h", ".hh", ".hpp", ".hxx", ".inl"})


def detect_language_from_path(file_path: Path) -> str:
    suffix = file_path.suffix.lower()
    if suffix in _EXTENSION_LANGUAGE_MAP:
        return _EXTENSION_LANGUAGE_MAP[suffix]
    raise ValueError(f"Unsupported file extension: {suffix}")


def is_supported_file(file_path: Path) -> bool:
    return file_path.suffix.lower() in _EXTENSION_LANGUAGE_MAP


def is_header_file(file_path: Path) -> bool:
    return file_path.suffix.lower() in HEADER_EXTENSIONS
