"""
Declaration map loader.

Reads the per-file import/export declaration map that a host bundler
produces, from a JSON or YAML document. Keys are file paths; values are
lists of declaration records.
"""

import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml

FileImports = dict[str, list[Any]]


class DeclarationLoadError(Exception):
    """Error while loading a declaration map."""
    pass


class DeclarationLoader:
    """
    Load host declaration maps from files or strings.

    Relative file keys are resolved against a base directory so that
    declaration maps can be checked in alongside a project.
    """

    @staticmethod
    def _normalize_keys(data: Any, base_dir: Optional[Path]) -> FileImports:
        """
        Validate the top-level shape and make every key absolute.

        Args:
            data: Decoded document.
            base_dir: Directory relative keys are resolved against.

        Returns:
            The declaration map with absolute, POSIX-style keys.

        Raises:
            DeclarationLoadError: If the document is not a mapping of lists.
        """
        if not isinstance(data, dict):
            raise DeclarationLoadError(
                f"Expected a mapping of file paths to declarations, got {type(data).__name__}"
            )

        file_imports: FileImports = {}
        for key, declarations in data.items():
            if declarations is None:
                declarations = []
            if not isinstance(declarations, list):
                raise DeclarationLoadError(
                    f"Declarations for {key} must be a list, got {type(declarations).__name__}"
                )
            path = str(key)
            if base_dir is not None and not os.path.isabs(path):
                path = os.path.join(str(base_dir), path)
            file_imports[Path(os.path.normpath(path)).as_posix()] = declarations

        return file_imports

    @classmethod
    def parse_string(
        cls,
        content: str,
        base_dir: Optional[Path] = None,
    ) -> FileImports:
        """
        Parse a declaration map from a string.

        JSON is tried first; anything else is parsed as YAML.

        Args:
            content: The document contents.
            base_dir: Directory relative keys are resolved against.

        Returns:
            The declaration map.

        Raises:
            DeclarationLoadError: If parsing fails.
        """
        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            try:
                data = yaml.safe_load(content)
            except yaml.YAMLError as e:
                raise DeclarationLoadError(f"Failed to parse declaration map: {e}") from e

        return cls._normalize_keys(data or {}, base_dir)

    @classmethod
    def parse_file(
        cls,
        path: Path,
        base_dir: Optional[Path] = None,
        encoding: str = "utf-8",
    ) -> FileImports:
        """
        Parse a declaration map file.

        Args:
            path: Path to a JSON or YAML file.
            base_dir: Directory relative keys are resolved against
                (default: the file's own directory).
            encoding: File encoding (default: utf-8).

        Returns:
            The declaration map.

        Raises:
            DeclarationLoadError: If the file cannot be read or parsed.
        """
        try:
            content = path.read_text(encoding=encoding)
        except OSError as e:
            raise DeclarationLoadError(f"Failed to read declaration map {path}: {e}") from e

        if base_dir is None:
            base_dir = Path(os.path.abspath(path)).parent

        return cls.parse_string(content, base_dir=base_dir)

    @classmethod
    def parse(
        cls,
        source: Union[Path, str],
        base_dir: Optional[Path] = None,
    ) -> FileImports:
        """
        Parse a declaration map from a file path or a string.

        Args:
            source: Either a Path to a declaration file or document contents.
            base_dir: Directory relative keys are resolved against.

        Returns:
            The declaration map.
        """
        if isinstance(source, Path):
            return cls.parse_file(source, base_dir=base_dir)
        elif isinstance(source, str):
            potential_path = Path(source)
            if len(source) < 4096 and potential_path.is_file():
                return cls.parse_file(potential_path, base_dir=base_dir)
            return cls.parse_string(source, base_dir=base_dir)
        else:
            raise DeclarationLoadError(f"Invalid source type: {type(source)}")
