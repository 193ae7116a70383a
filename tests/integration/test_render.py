import pytest

from hooktemplates.hooks import HookBus, Topic, echo
from hooktemplates.templating import Template
from hooktemplates.utils import replace_last
from tests.conftest import DummyPluginOrigin, EngineFactory

HOOK_NAME = "dummy/dummy-template"


def add_container_actions(engine: Template, hook_name: str) -> None:
    engine.bus.add_action(
        engine.topic(Topic.TEMPLATE_ENTRY_POINT, hook_name, "after_container_open"),
        lambda *_: echo("<i>open</i>"),
    )
    engine.bus.add_action(
        engine.topic(Topic.TEMPLATE_ENTRY_POINT, hook_name, "before_container_close"),
        lambda *_: echo("<i>close</i>"),
    )


class TestContainerEntryPoints:
    def test_after_container_open(self, dummy_engine: Template) -> None:
        dummy_engine.bus.add_action(
            dummy_engine.topic(
                Topic.TEMPLATE_ENTRY_POINT, HOOK_NAME, "after_container_open"
            ),
            lambda *_: echo("<span>First</span>"),
        )

        html = dummy_engine.render("dummy-template", echo=False)

        assert html == (
            '<div class="test"><span>First</span>Dummy template</div>'
        )

    def test_before_container_close(self, dummy_engine: Template) -> None:
        dummy_engine.bus.add_action(
            dummy_engine.topic(
                Topic.TEMPLATE_ENTRY_POINT, HOOK_NAME, "before_container_close"
            ),
            lambda *_: echo("<span>Last</span>"),
        )

        html = dummy_engine.render("dummy-template", echo=False)

        assert html == '<div class="test">Dummy template<span>Last</span></div>'

    def test_custom_entry_point_from_html_filter(self, dummy_engine: Template) -> None:
        bus = dummy_engine.bus
        bus.add_action(
            dummy_engine.topic(Topic.TEMPLATE_ENTRY_POINT, HOOK_NAME, "custom"),
            lambda *_: echo("<b>Custom</b>"),
        )

        def add_custom(html: str, *_: object) -> str:
            custom = dummy_engine.do_entry_point("custom", echo=False) or ""
            return replace_last("</div>", custom + "</div>", html)

        bus.add_filter(dummy_engine.topic(Topic.TEMPLATE_HTML, HOOK_NAME), add_custom)

        html = dummy_engine.render("dummy-template", echo=False)

        assert html == '<div class="test">Dummy template<b>Custom</b></div>'

    @pytest.mark.parametrize(
        "name",
        [
            "dummy-invalid-template-01",
            "dummy-invalid-template-02",
            "dummy-invalid-template-03",
            "dummy-invalid-template-04",
        ],
    )
    def test_unframed_markup_is_not_injected(
        self, dummy_engine: Template, name: str
    ) -> None:
        template_file = dummy_engine.get_template_file(name)
        assert template_file is not None
        plain = dummy_engine.render(name, echo=False)
        add_container_actions(dummy_engine, f"dummy/{name}")

        assert dummy_engine.render(name, echo=False) == plain
        assert "<i>" not in (plain or "")

    def test_valid_link(self, dummy_engine: Template) -> None:
        add_container_actions(dummy_engine, "dummy/dummy-valid-template-01")

        html = dummy_engine.render("dummy-valid-template-01", echo=False)

        assert html == (
            '<a href="https://example.com" class="test" target="_blank" '
            'title="Test Link" data-link="automated-tests">'
            "<i>open</i>Test Link<i>close</i></a>"
        )

    def test_valid_multiline_opening_tag(self, dummy_engine: Template) -> None:
        add_container_actions(dummy_engine, "dummy/dummy-valid-template-02")

        html = dummy_engine.render("dummy-valid-template-02", echo=False)

        assert html is not None
        assert html.replace("\n", "") == (
            '<div    class="view view--dummy"'
            '    data-view-breakpoint-pointer="99ccf293-c1b0-41b2-a1c8-033776ac6f10"'
            '><i>open</i>    <p class="view__content">Breakpoints</p><i>close</i></div>'
        )

    def test_valid_nested_containers(self, dummy_engine: Template) -> None:
        add_container_actions(dummy_engine, "dummy/dummy-valid-template-03")

        html = dummy_engine.render(
            "dummy-valid-template-03", {"title": "Views"}, echo=False
        )

        assert html is not None
        assert html.replace("\n", "") == (
            '<div class="view view--base view--dummy"><i>open</i>'
            '    <div class="view__header"><h2>Views</h2></div>'
            '    <div class="view__body">Body</div><i>close</i></div>'
        )

    def test_disabled_entry_points_leave_markup_unchanged(
        self, dummy_engine: Template, bus: HookBus
    ) -> None:
        add_container_actions(dummy_engine, HOOK_NAME)
        bus.add_filter(
            dummy_engine.topic(Topic.TEMPLATE_ENTRY_POINT_IS_ENABLED),
            lambda *_: False,
        )

        html = dummy_engine.render("dummy-template", echo=False)

        assert html == '<div class="test">Dummy template</div>'


class TestNestedRender:
    def test_child_context_is_visible_to_parent(self, dummy_engine: Template) -> None:
        html = dummy_engine.render("nested-parent", echo=False)

        assert html == "<section><i>from-parent</i><em>from-parent</em></section>"

    def test_hook_name_is_restored_after_child(self, dummy_engine: Template) -> None:
        seen: list[str] = []
        dummy_engine.bus.add_action(
            dummy_engine.topic(Topic.TEMPLATE_AFTER_INCLUDE),
            lambda *_: seen.append(dummy_engine.get_template_current_hook_name()),
        )

        _ = dummy_engine.render("nested-parent", echo=False)

        assert seen == ["dummy/nested-child", "dummy/nested-parent"]
        assert dummy_engine.get_template_current_hook_name() == ""


class TestRenderOptions:
    def test_extract_context_binds_names(self, make_engine: EngineFactory) -> None:
        engine = make_engine(origin=DummyPluginOrigin(), extract_context=True)

        html = engine.render("extracted-title", {"title": "Extracted"}, echo=False)

        assert html == '<p class="title">Extracted</p>'

    def test_extract_can_be_enabled_per_render(self, dummy_engine: Template) -> None:
        html = dummy_engine.render(
            "extracted-title", {"title": "Once"}, echo=False, extract_context=True
        )

        assert html == '<p class="title">Once</p>'

    def test_folder_outside_base_folder_joins_hook_name(
        self, make_engine: EngineFactory
    ) -> None:
        engine = make_engine(origin=DummyPluginOrigin(), folder="v2")
        engine.bus.add_action(
            engine.topic(
                Topic.TEMPLATE_ENTRY_POINT, "dummy/v2/card", "after_container_open"
            ),
            lambda *_: echo("<b>New</b>"),
        )

        html = engine.render("card", {"name": "Mug"}, echo=False)

        assert html == '<article class="card"><b>New</b>Mug</article>'

    def test_echo_writes_markup(
        self, dummy_engine: Template, capsys: pytest.CaptureFixture[str]
    ) -> None:
        html = dummy_engine.render("dummy-template")

        assert capsys.readouterr().out == html
