from __future__ import annotations

import re

from hypothesis import given
from hypothesis import strategies as st

from uzzy.git.repo_discovery import is_excluded
from uzzy.tmux.naming import slugify

_SLUG = re.compile(r"^[a-z0-9-]+$")
_SEGMENT = st.text(min_size=0, max_size=40).filter(lambda value: "/" not in value and "\x00" not in value)


@given(st.lists(_SEGMENT, min_size=1, max_size=5))
def test_slugify_output_is_a_valid_session_name(segments: list[str]) -> None:
    slug = slugify("/" + "/".join(segments))

    assert _SLUG.match(slug)
    assert "--" not in slug
    assert not slug.startswith("-")
    assert not slug.endswith("-")


@given(_SEGMENT)
def test_slugify_is_idempotent(segment: str) -> None:
    once = slugify("/home/user/" + segment)

    assert slugify(once) == once


@given(
    st.lists(st.text(min_size=1, max_size=8), max_size=5),
    st.text(min_size=1, max_size=40),
)
def test_excluded_paths_contain_a_pattern(patterns: list[str], path: str) -> None:
    assert is_excluded(path, patterns) == any(pattern in path for pattern in patterns)
