__all__ = ["load_yaml", "load_json", "load_config_file", "zip_content"]

import json
import os
from typing import IO, Literal, Optional, Tuple
from zipfile import ZipFile

import yaml


def load_yaml(file, **kwargs):
    with open(file, "r") as f:
        return yaml.safe_load(f, **kwargs)


def load_json(file, **kwargs):
    with open(file, "r") as f:
        return json.load(f, **kwargs)


def load_config_file(file: str) -> dict:
    ext = os.path.splitext(file)[1].lower()
    if ext == ".json":
        configs = load_json(file)
    else:
        configs = load_yaml(file)
    return configs or {}


def resolve_zip_content_path(path: str) -> Tuple[str, Optional[str]]:
    """Split ``archive.zip/inner/file.mgf`` into the archive and its member."""
    if os.path.exists(path):
        return path, None

    parent_path = path
    content_path = None

    while (
        not os.path.exists(parent_path)
        or os.path.splitext(parent_path)[1].lower() != ".zip"
    ):
        parent, basename = os.path.split(parent_path)
        if parent == "" or basename == "":
            raise IOError(f"file not found: {path}")

        parent_path = parent
        if content_path is None:
            content_path = basename
        else:
            content_path = f"{basename}/{content_path}"

    return parent_path, content_path


def zip_content(path: str, mode: Literal["r"] = "r") -> IO:
    """Open a plain file, or a member of a zip archive, for binary reading."""
    parent_path, content_path = resolve_zip_content_path(path)
    if content_path is None:
        return open(parent_path, mode + "b")

    # the archive file stays open until the member stream is closed
    with ZipFile(parent_path) as zip:
        return zip.open(content_path, mode)
