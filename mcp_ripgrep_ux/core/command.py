"""
Command construction for the search tool
"""
from typing import Sequence

from .domain import SearchSpec


def build_search_args(spec: SearchSpec, extra_args: Sequence[str] = ()) -> list[str]:
    """Translate a SearchSpec into ripgrep arguments.

    Case-insensitive unless case_sensitive is set.
    `extra_args` go right after -n. The pattern is always the value of -e,
    so a pattern starting with a dash is never read as an option.
    """
    args = ["-n"]
    args.extend(extra_args)

    if not spec.case_sensitive:
        args.append("-i")

    if spec.include_hidden:
        args.append("--hidden")

    if not spec.use_regex:
        args.append("-F")

    args.extend(["-e", spec.pattern])
    directory = str(spec.root_directory) if spec.root_directory is not None else ""
    if directory:
        args.append(directory)

    return args
