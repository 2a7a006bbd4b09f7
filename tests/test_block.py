"""End-to-end tests for SiteCountsBlock.render."""

import re
from datetime import datetime, timedelta
from pathlib import Path

import pytest
from sitecounts.block import SiteCountsBlock, load_block_metadata
from sitecounts.config import SiteCountsConfig
from sitecounts.hooks import CONTENT_HOOK, MARKUP_HOOK, Hooks
from sitecounts.models import (
    BlockInstance,
    ContentItem,
    ContentRecord,
    PresentationAttributes,
)
from sitecounts.presentation import PresentationBuilder
from sitecounts.repository import ContentStore


def _make_items(count: int) -> list[ContentItem]:
    return [ContentItem(id=i, title=chr(ord("A") + i - 1)) for i in range(1, count + 1)]


def _list_entries(markup: str) -> list[str]:
    return re.findall(r"<li> (.*?) </li>", markup)


class TestMetadata:
    def test_packaged_block_json(self):
        metadata = load_block_metadata()
        assert metadata.name == "xwp/site-counts"
        assert metadata.textdomain == "site-counts"
        assert "textColor" in metadata.uses_context

    def test_config_renames_block(self, make_repository):
        config = SiteCountsConfig.model_validate({"block": {"name": "acme/counts"}})
        block = SiteCountsBlock(make_repository(), config=config)

        markup = block.render({}, "", {})

        assert markup.startswith('<div class="wp-block-acme-counts">')


class TestRender:
    def test_full_markup(self, make_repository, post_and_page):
        repo = make_repository(
            types=post_and_page,
            counts={"post": 3, "page": 0},
            items=_make_items(6),
        )
        block = SiteCountsBlock(repo)

        markup = block.render({}, "", BlockInstance(current_item_id=3))

        assert markup == (
            '<div class="wp-block-xwp-site-counts">'
            "<ul><li>There are 3 Posts.</li><li>There are 0 Pages.</li></ul>"
            "<p>The current post ID is 3</p>"
            "<h2>5 posts with the tag of foo and the category of baz</h2>"
            "<ul><li> A </li><li> B </li><li> D </li><li> E </li><li> F </li></ul>"
            "</div>"
        )

    def test_without_current_item(self, make_repository, post_and_page):
        block = SiteCountsBlock(make_repository(types=post_and_page, items=_make_items(2)))

        markup = block.render(None, "", {})

        assert "<p>The current post ID is 0</p>" in markup
        assert _list_entries(markup) == ["A", "B"]

    def test_no_matches_omits_list(self, make_repository, post_and_page):
        block = SiteCountsBlock(make_repository(types=post_and_page))

        markup = block.render({}, "", {"current_item_id": 9})

        assert "<h2>" not in markup
        assert markup.endswith("<p>The current post ID is 9</p></div>")

    def test_content_is_ignored(self, make_repository):
        block = SiteCountsBlock(make_repository())
        assert block.render({}, "<p>saved</p>", {}) == block.render({}, "", {})

    def test_idempotent(self, make_repository, post_and_page):
        repo = make_repository(types=post_and_page, counts={"post": 2}, items=_make_items(4))
        block = SiteCountsBlock(repo)
        instance = BlockInstance(context={"fontSize": "large"}, current_item_id=2)

        assert block.render({}, "", instance) == block.render({}, "", instance)

    def test_render_result(self, make_repository):
        result = SiteCountsBlock(make_repository()).render_result({}, {})
        assert result.markup.startswith("<div ")


class TestPresentation:
    def test_style_context_reaches_wrapper(self, make_repository):
        block = SiteCountsBlock(make_repository())
        instance = BlockInstance(
            context={"textColor": "vividRed", "style": {"typography": {"fontSize": "18px"}}}
        )

        markup = block.render({"className": "is-compact"}, "", instance)

        assert markup.startswith(
            '<div class="wp-block-xwp-site-counts has-text-color has-vivid-red-color '
            'is-compact" style="font-size: 18px;">'
        )

    def test_undeclared_context_is_dropped(self, make_repository):
        seen: list[dict] = []

        class Recording(PresentationBuilder):
            def build_attributes(self, style_context):
                seen.append(style_context)
                return PresentationAttributes()

        block = SiteCountsBlock(make_repository(), presentation=Recording())
        block.render({}, "", {"context": {"fontSize": "small", "postId": 12}})

        assert seen == [{"fontSize": "small"}]

    def test_injected_builder(self, make_repository):
        class Fixed(PresentationBuilder):
            def build_attributes(self, style_context):
                return PresentationAttributes(css_classes=["custom"], inline_styles="gap: 0;")

        block = SiteCountsBlock(make_repository(), presentation=Fixed())
        markup = block.render({}, "", {})

        assert markup.startswith(
            '<div class="wp-block-xwp-site-counts custom" style="gap: 0;">'
        )


class TestHooks:
    def test_output_suffix(self, make_repository, post_and_page):
        hooks = Hooks()
        hooks.register(CONTENT_HOOK, lambda markup: markup + "<!-- suffix -->")
        block = SiteCountsBlock(
            make_repository(types=post_and_page, items=_make_items(3)), hooks=hooks
        )

        assert block.render({}, "", {"current_item_id": 1}).endswith("<!-- suffix -->")

    def test_template_override_sees_fragments(self, make_repository, post_and_page):
        received: list[tuple] = []

        def override(template, attributes, counts, current, posts):
            received.append((attributes, counts, current, posts))
            return "<aside>{2}</aside>"

        hooks = Hooks()
        hooks.register(MARKUP_HOOK, override)
        block = SiteCountsBlock(
            make_repository(types=post_and_page, counts={"post": 1}), hooks=hooks
        )

        markup = block.render({}, "", {"current_item_id": 5})

        assert markup == "<aside>The current post ID is 5</aside>"
        assert received == [
            (
                'class="wp-block-xwp-site-counts"',
                "<li>There are 1 Posts.</li><li>There are 0 Pages.</li>",
                "The current post ID is 5",
                "",
            )
        ]

    def test_hooks_registered_after_construction(self, make_repository):
        block = SiteCountsBlock(make_repository())
        block.hooks.register(CONTENT_HOOK, lambda markup: "replaced")

        assert block.render({}, "", {}) == "replaced"


class TestWithContentStore:
    @pytest.fixture
    def store(self, tmp_path: Path) -> ContentStore:
        store = ContentStore(tmp_path)
        base = datetime(2024, 5, 1, 10, 0)
        for i in range(1, 8):
            store.upsert(
                ContentRecord(
                    id=i,
                    title=f"Post {i}",
                    published_at=base + timedelta(days=i),
                    categories=["baz"],
                    tags=["foo"],
                )
            )
        store.upsert(
            ContentRecord(
                id=50,
                title="Evening",
                published_at=datetime(2024, 6, 1, 21, 0),
                categories=["baz"],
                tags=["foo"],
            )
        )
        store.upsert(
            ContentRecord(id=60, title="About", item_type="page", published_at=base)
        )
        return store

    def test_counts_from_store(self, store: ContentStore):
        markup = SiteCountsBlock(store).render({}, "", {})
        assert (
            "<ul><li>There are 8 Posts.</li><li>There are 1 Pages.</li>"
            "<li>There are 0 Media.</li></ul>"
        ) in markup

    def test_newest_six_minus_current(self, store: ContentStore):
        markup = SiteCountsBlock(store).render({}, "", {"current_item_id": 5})
        assert _list_entries(markup) == ["Post 7", "Post 6", "Post 4", "Post 3", "Post 2"]

    def test_current_outside_fetch(self, store: ContentStore):
        markup = SiteCountsBlock(store).render({}, "", {"current_item_id": 1})
        assert _list_entries(markup) == [
            "Post 7",
            "Post 6",
            "Post 5",
            "Post 4",
            "Post 3",
            "Post 2",
        ]

    def test_configured_query(self, store: ContentStore):
        config = SiteCountsConfig.model_validate({"query": {"tag": "missing"}})
        markup = SiteCountsBlock(store, config=config).render({}, "", {})
        assert "<h2>" not in markup
