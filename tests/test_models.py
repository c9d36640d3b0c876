"""Tests for model assembly, serialization and the result store."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from site_audit.crawler.models import (
    Classification,
    EntityType,
    PageTemplate,
    SiteEntity,
    SiteModel,
    SiteModelBuilder,
    TemplateType,
    summarize,
)
from site_audit.store import SiteModelStore

ROOT = "https://shop.example.com"


def _template(template_type: TemplateType, url: str) -> PageTemplate:
    return PageTemplate.from_classification(
        url,
        Classification(
            template_type=template_type,
            url_pattern="/x",
            characteristics=("a",),
            detected_elements=("Navigation",),
        ),
    )


# ---------------------------------------------------------------------------
# SiteModelBuilder
# ---------------------------------------------------------------------------

class TestSiteModelBuilder:
    def test_first_template_of_a_type_wins(self) -> None:
        builder = SiteModelBuilder(ROOT)
        assert builder.add_template(_template(TemplateType.CATEGORY, f"{ROOT}/a")) is True
        assert builder.add_template(_template(TemplateType.CATEGORY, f"{ROOT}/b")) is False

        model = builder.build()
        assert len(model.templates) == 1
        assert model.templates[TemplateType.CATEGORY].example_urls == (f"{ROOT}/a",)

    def test_entities_deduplicated_by_url(self) -> None:
        builder = SiteModelBuilder(ROOT)
        builder.add_entity(SiteEntity(EntityType.CATEGORY, "Shoes", f"{ROOT}/shoes"))
        builder.add_entity(SiteEntity(EntityType.CATEGORY, "All shoes", f"{ROOT}/shoes"))
        builder.add_entity(SiteEntity(EntityType.CATEGORY, "Hats", f"{ROOT}/hats"))

        model = builder.build()
        assert [e.name for e in model.entities] == ["Shoes", "Hats"]

    def test_has_template(self) -> None:
        builder = SiteModelBuilder(ROOT)
        assert not builder.has_template(TemplateType.HOME)
        builder.add_template(_template(TemplateType.HOME, ROOT))
        assert builder.has_template(TemplateType.HOME)

    def test_built_model_is_frozen(self) -> None:
        model = SiteModelBuilder(ROOT).build()
        with pytest.raises(AttributeError):
            model.domain = "https://elsewhere.example.com"  # type: ignore[misc]
        with pytest.raises(TypeError):
            model.templates[TemplateType.HOME] = _template(TemplateType.HOME, ROOT)  # type: ignore[index]

    def test_builder_changes_after_build_do_not_leak(self) -> None:
        builder = SiteModelBuilder(ROOT)
        model = builder.build()
        builder.add_template(_template(TemplateType.HOME, ROOT))
        builder.add_visited(f"{ROOT}/a")
        assert len(model.templates) == 0
        assert model.site_map == ()


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

class TestSerialization:
    def _model(self, robots: str | None = "User-agent: *") -> SiteModel:
        builder = SiteModelBuilder(ROOT)
        builder.robots_txt = robots
        builder.add_template(_template(TemplateType.HOME, ROOT))
        builder.add_entity(SiteEntity(EntityType.CATEGORY, "Shoes", f"{ROOT}/shoes"))
        builder.add_entity(
            SiteEntity(EntityType.SUBCATEGORY, "Boots", f"{ROOT}/shoes/boots", parent_category="Shoes")
        )
        builder.add_visited(f"{ROOT}/shoes")
        return builder.build()

    def test_contract_keys(self) -> None:
        data = self._model().to_dict()
        assert set(data) == {"domain", "analyzedAt", "templates", "entities", "siteMap", "robotsTxt"}
        assert data["domain"] == ROOT
        assert data["siteMap"] == [f"{ROOT}/shoes"]

    def test_templates_keyed_by_type(self) -> None:
        data = self._model().to_dict()
        assert data["templates"] == {
            "Home Page": {
                "type": "Home Page",
                "urlPattern": "/x",
                "exampleUrls": [ROOT],
                "characteristics": ["a"],
                "detectedElements": ["Navigation"],
            }
        }

    def test_parent_category_only_when_present(self) -> None:
        entities = self._model().to_dict()["entities"]
        assert entities[0] == {"type": "category", "name": "Shoes", "url": f"{ROOT}/shoes"}
        assert entities[1]["parentCategory"] == "Shoes"

    def test_robots_txt_omitted_when_absent(self) -> None:
        assert "robotsTxt" not in self._model(robots=None).to_dict()

    def test_analyzed_at_is_iso_utc(self) -> None:
        model = SiteModel(
            domain=ROOT, analyzed_at=datetime(2024, 5, 1, 12, 30, 15, 250000, tzinfo=timezone.utc)
        )
        assert model.to_dict()["analyzedAt"] == "2024-05-01T12:30:15.250Z"

    def test_categories_helper_and_summary(self) -> None:
        model = self._model()
        assert [e.name for e in model.categories()] == ["Shoes", "Boots"]
        assert summarize(model) == {
            "templatesFound": 1,
            "categoriesFound": 1,
            "subcategoriesFound": 1,
            "pagesAnalyzed": 1,
        }


# ---------------------------------------------------------------------------
# SiteModelStore
# ---------------------------------------------------------------------------

class TestSiteModelStore:
    def test_put_and_get(self) -> None:
        store = SiteModelStore()
        model = SiteModelBuilder(ROOT).build()
        store.put(ROOT, model)
        assert store.get(ROOT) is model
        assert ROOT in store
        assert len(store) == 1

    def test_keys_are_raw_strings(self) -> None:
        store = SiteModelStore()
        store.put(ROOT, SiteModelBuilder(ROOT).build())
        assert store.get(f"{ROOT}/") is None

    def test_last_write_wins(self) -> None:
        store = SiteModelStore()
        first = SiteModelBuilder(ROOT).build()
        second = SiteModelBuilder(ROOT).build()
        store.put(ROOT, first)
        store.put(ROOT, second)
        assert store.get(ROOT) is second

    def test_clear(self) -> None:
        store = SiteModelStore()
        store.put(ROOT, SiteModelBuilder(ROOT).build())
        store.clear()
        assert len(store) == 0
        assert store.get(ROOT) is None
