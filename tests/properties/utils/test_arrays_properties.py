from hypothesis import given, strategies as st

from hooktemplates.utils import get_nested, set_nested

key = st.from_regex(r"[a-z]{1,4}", fullmatch=True)
key_path = st.lists(key, min_size=1, max_size=4)
scalar = st.one_of(st.integers(), st.text(max_size=10), st.booleans())


@given(path=key_path, value=scalar)
def test_set_then_get_returns_value(path: list[str], value: object) -> None:
    data: dict[str, object] = {}

    _ = set_nested(data, path, value)

    assert get_nested(data, path) == value
    assert get_nested(data, ".".join(path)) == value


@given(path=key_path, value=scalar, other=scalar)
def test_set_leaves_sibling_keys(path: list[str], value: object, other: object) -> None:
    data: dict[str, object] = {"_sibling": other}

    _ = set_nested(data, path, value)

    assert data["_sibling"] == other


@given(path=key_path, default=scalar)
def test_missing_path_returns_default(path: list[str], default: object) -> None:
    assert get_nested({}, path, default) == default
