import pytest

from hooktemplates.utils import replace_first, replace_last, sanitize_title_with_dashes

SUBJECT = "I really like bacon, but I like bacon more!"


class TestReplaceFirst:
    def test_replaces_first_occurrence(self) -> None:
        actual = replace_first("bacon", "eggs", SUBJECT)

        assert actual == "I really like eggs, but I like bacon more!"

    def test_empty_search_returns_subject(self) -> None:
        assert replace_first("", "eggs", SUBJECT) == SUBJECT

    def test_missing_search_returns_subject(self) -> None:
        assert replace_first("sausage", "eggs", SUBJECT) == SUBJECT

    def test_empty_subject_stays_empty(self) -> None:
        assert replace_first("bacon", "eggs", "") == ""


class TestReplaceLast:
    def test_replaces_last_occurrence(self) -> None:
        actual = replace_last("bacon", "eggs", SUBJECT)

        assert actual == "I really like bacon, but I like eggs more!"

    def test_empty_search_returns_subject(self) -> None:
        assert replace_last("", "eggs", SUBJECT) == SUBJECT

    def test_missing_search_returns_subject(self) -> None:
        assert replace_last("sausage", "eggs", SUBJECT) == SUBJECT

    def test_empty_subject_stays_empty(self) -> None:
        assert replace_last("bacon", "eggs", "") == ""

    def test_replacement_may_contain_search(self) -> None:
        actual = replace_last("</div>", "<b>x</b></div>", "<div>a</div>")

        assert actual == "<div>a<b>x</b></div>"


class TestSanitizeTitleWithDashes:
    @pytest.mark.parametrize(
        ("title", "expected"),
        [
            ("dummy-template", "dummy-template"),
            ("Dummy Template", "dummy-template"),
            ("Café Menu", "cafe-menu"),
            ("list.v2", "list-v2"),
            ("  spaced   out  ", "spaced-out"),
            ("<b>bold</b> name", "bold-name"),
            ("fish &amp; chips", "fish-chips"),
            ("snake_case", "snake_case"),
            ("what?!", "what"),
            ("--a--b--", "a-b"),
            ("", ""),
        ],
    )
    def test_produces_slug(self, title: str, expected: str) -> None:
        assert sanitize_title_with_dashes(title) == expected
