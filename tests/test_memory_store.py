"""
Tests for the in-memory catalog store.
"""
import re

import pytest

from fashion_ai.core.exceptions import DuplicateIdError
from fashion_ai.core.models import LookSuggestion
from fashion_ai.db import FashionStore, SAMPLE_ITEMS


@pytest.fixture
def fresh_store():
    return FashionStore()


def _item(store, **overrides):
    fields = {
        "image_url": "data:image/jpeg;base64,AAAA",
        "type": "Camisa",
        "colors": ["Branco"],
        "styles": ["Casual"],
        "season": ["Verão"],
        "occasion": ["Trabalho"],
        "description": "Camisa branca",
    }
    fields.update(overrides)
    return store.add_clothing_item(**fields)


def _look(look_id="look_1", items=None):
    return LookSuggestion(
        id=look_id,
        title="Look",
        description="desc",
        items=items or [],
        reasoning="r",
        tips=[],
        confidence=0.8,
    )


# ==================== CLOTHING ITEMS ====================

class TestClothingItems:
    """Add/get/update/delete of catalog items."""

    def test_add_assigns_id_and_timestamp(self, fresh_store):
        item = _item(fresh_store)

        assert re.fullmatch(r"item_\d+_[a-z0-9]{9}", item.id)
        assert item.created_at is not None
        assert fresh_store.get_all_clothing_items() == [item]

    def test_ids_are_unique(self, fresh_store):
        ids = {_item(fresh_store).id for _ in range(50)}
        assert len(ids) == 50

    def test_add_rejects_unknown_fields(self, fresh_store):
        with pytest.raises(ValueError):
            fresh_store.add_clothing_item(type="Camisa", image_url="x", brand="Acme")

    def test_get_all_returns_copy(self, fresh_store):
        _item(fresh_store)
        items = fresh_store.get_all_clothing_items()
        items.clear()

        assert len(fresh_store.get_all_clothing_items()) == 1

    def test_returned_items_cannot_change_store(self, fresh_store):
        colors = ["Branco"]
        item = _item(fresh_store, colors=colors)
        colors.append("Preto")
        item.styles.append("Boho-Chic")
        fresh_store.get_all_clothing_items()[0].season.append("Inverno")
        fresh_store.get_clothing_item_by_id(item.id).type = "Blusa"
        fresh_store.filter_clothing_items(type="Camisa")[0].occasion.clear()

        stored = fresh_store.get_clothing_item_by_id(item.id)
        assert stored.colors == ["Branco"]
        assert stored.styles == ["Casual"]
        assert stored.season == ["Verão"]
        assert stored.occasion == ["Trabalho"]
        assert stored.type == "Camisa"

    def test_updated_item_cannot_change_store(self, fresh_store):
        item = _item(fresh_store)
        colors = ["Rosa"]

        updated = fresh_store.update_clothing_item(item.id, {"colors": colors})
        colors.append("Azul")
        updated.colors.append("Verde")

        assert fresh_store.get_clothing_item_by_id(item.id).colors == ["Rosa"]

    def test_get_by_id(self, fresh_store):
        item = _item(fresh_store)

        assert fresh_store.get_clothing_item_by_id(item.id) == item
        assert fresh_store.get_clothing_item_by_id("missing") is None

    def test_update_merges_fields(self, fresh_store):
        item = _item(fresh_store)

        updated = fresh_store.update_clothing_item(item.id, {"type": "Blusa", "colors": ["Rosa"]})

        assert updated.type == "Blusa"
        assert updated.colors == ["Rosa"]
        assert updated.styles == ["Casual"]
        assert updated.id == item.id
        assert updated.created_at == item.created_at
        assert fresh_store.get_clothing_item_by_id(item.id).type == "Blusa"

    def test_update_unknown_id_returns_none(self, fresh_store):
        assert fresh_store.update_clothing_item("missing", {"type": "Blusa"}) is None

    def test_update_cannot_change_id(self, fresh_store):
        item = _item(fresh_store)

        with pytest.raises(ValueError):
            fresh_store.update_clothing_item(item.id, {"id": "other"})

    def test_delete(self, fresh_store):
        item = _item(fresh_store)

        assert fresh_store.delete_clothing_item(item.id) is True
        assert fresh_store.delete_clothing_item(item.id) is False
        assert fresh_store.get_all_clothing_items() == []


# ==================== FILTERS ====================

class TestFilterClothingItems:
    """Filter semantics: exact type, substring-any for list fields, AND across filters."""

    @pytest.fixture
    def catalog(self, fresh_store):
        shirt = _item(fresh_store, type="Camisa", colors=["Azul Marinho"], styles=["Clássico"],
                      season=["Primavera", "Verão"], occasion=["Trabalho"])
        jeans = _item(fresh_store, type="Calça", colors=["Azul"], styles=["Casual", "Streetwear"],
                      season=["Outono"], occasion=["Casual"])
        dress = _item(fresh_store, type="Vestido", colors=["Vermelho"], styles=["Chic/Elegante"],
                      season=["Verão"], occasion=["Festa"])
        return fresh_store, shirt, jeans, dress

    def test_no_filters_returns_everything(self, catalog):
        store, shirt, jeans, dress = catalog
        assert store.filter_clothing_items() == [shirt, jeans, dress]

    def test_type_is_exact_case_insensitive(self, catalog):
        store, shirt, _, _ = catalog

        assert store.filter_clothing_items(type="camisa") == [shirt]
        assert store.filter_clothing_items(type="Cami") == []

    def test_list_filter_matches_substring(self, catalog):
        store, shirt, jeans, _ = catalog

        assert store.filter_clothing_items(colors=["azul"]) == [shirt, jeans]
        assert store.filter_clothing_items(colors=["marinho"]) == [shirt]

    def test_list_filter_matches_any_value(self, catalog):
        store, _, jeans, dress = catalog

        assert store.filter_clothing_items(styles=["street", "chic"]) == [jeans, dress]

    def test_filters_are_combined(self, catalog):
        store, shirt, _, _ = catalog

        assert store.filter_clothing_items(colors=["azul"], season=["verão"]) == [shirt]
        assert store.filter_clothing_items(type="Vestido", occasion=["trabalho"]) == []

    def test_empty_list_filters_are_ignored(self, catalog):
        store, shirt, jeans, dress = catalog

        assert store.filter_clothing_items(styles=[], colors=None) == [shirt, jeans, dress]


# ==================== LOOKS AND FEEDBACK ====================

class TestLooksAndFeedback:

    def test_add_and_get_look(self, fresh_store):
        look = fresh_store.add_look_suggestion(_look("look_a"))

        assert fresh_store.get_look_suggestion_by_id("look_a") == look
        assert fresh_store.has_look_suggestion("look_a")
        assert fresh_store.get_all_look_suggestions() == [look]

    def test_returned_look_cannot_change_store(self, fresh_store):
        look = _look("look_a", items=["item_1"])
        fresh_store.add_look_suggestion(look)
        look.items.append("item_2")

        fetched = fresh_store.get_look_suggestion_by_id("look_a")
        fetched.items.clear()
        fetched.tips.append("Use cinto")
        fresh_store.get_all_look_suggestions()[0].title = "Outro"

        stored = fresh_store.get_look_suggestion_by_id("look_a")
        assert stored.items == ["item_1"]
        assert stored.tips == []
        assert stored.title == "Look"

    def test_duplicate_look_id_rejected(self, fresh_store):
        fresh_store.add_look_suggestion(_look("look_a"))

        with pytest.raises(DuplicateIdError):
            fresh_store.add_look_suggestion(_look("look_a"))

    def test_add_feedback(self, fresh_store):
        feedback = fresh_store.add_feedback("look_a", "approve", "Adorei")

        assert re.fullmatch(r"feedback_\d+_[a-z0-9]{9}", feedback.id)
        assert feedback.look_id == "look_a"
        assert feedback.comments == "Adorei"
        assert fresh_store.get_all_feedbacks() == [feedback]

    def test_feedback_rating_is_validated(self, fresh_store):
        with pytest.raises(ValueError):
            fresh_store.add_feedback("look_a", "maybe")

    def test_feedbacks_for_look(self, fresh_store):
        fresh_store.add_feedback("look_a", "approve")
        fresh_store.add_feedback("look_b", "reject")
        fresh_store.add_feedback("look_a", "reject")

        ratings = [f.rating for f in fresh_store.get_feedbacks_for_look("look_a")]
        assert ratings == ["approve", "reject"]

    def test_look_feedback_summary(self, fresh_store):
        fresh_store.add_feedback("look_a", "approve")
        fresh_store.add_feedback("look_a", "approve")
        fresh_store.add_feedback("look_a", "reject")
        fresh_store.add_feedback("look_a", "approve")

        summary = fresh_store.get_look_feedback_summary("look_a")
        assert summary["approved"] == 3
        assert summary["rejected"] == 1
        assert summary["approvalRate"] == 75.0


# ==================== STATISTICS ====================

class TestStats:

    def test_empty_stats(self, fresh_store):
        stats = fresh_store.get_stats()

        assert stats.total_items == 0
        assert stats.total_feedbacks == 0
        assert stats.approval_rate == 0
        assert stats.style_distribution == {}
        assert stats.type_distribution == {}

    def test_distributions_and_approval_rate(self, fresh_store):
        _item(fresh_store, type="Camisa", styles=["Casual", "Clássico"])
        _item(fresh_store, type="Camisa", styles=["Casual"])
        _item(fresh_store, type="Tênis", styles=["Streetwear"])
        fresh_store.add_look_suggestion(_look("look_a"))
        fresh_store.add_feedback("look_a", "approve")
        fresh_store.add_feedback("look_a", "reject")
        fresh_store.add_feedback("look_a", "reject")
        fresh_store.add_feedback("look_a", "reject")

        stats = fresh_store.get_stats().to_dict()

        assert stats["totalItems"] == 3
        assert stats["totalSuggestions"] == 1
        assert stats["totalFeedbacks"] == 4
        assert stats["approvedSuggestions"] == 1
        assert stats["rejectedSuggestions"] == 3
        assert stats["approvalRate"] == 25.0
        assert stats["styleDistribution"] == {"Casual": 2, "Clássico": 1, "Streetwear": 1}
        assert stats["typeDistribution"] == {"Camisa": 2, "Tênis": 1}


# ==================== MAINTENANCE ====================

class TestMaintenance:

    def test_clear_all(self, fresh_store):
        _item(fresh_store)
        fresh_store.add_look_suggestion(_look())
        fresh_store.add_feedback("look_1", "approve")

        fresh_store.clear_all()

        assert fresh_store.get_all_clothing_items() == []
        assert fresh_store.get_all_look_suggestions() == []
        assert fresh_store.get_all_feedbacks() == []

    def test_seeded_items_do_not_share_sample_lists(self, fresh_store):
        items = fresh_store.seed_sample_data()
        items[0].colors.append("Verde")

        assert SAMPLE_ITEMS[0]["colors"] == ["Branco", "Azul"]

    def test_seed_sample_data(self, fresh_store):
        items = fresh_store.seed_sample_data()

        assert len(items) == len(SAMPLE_ITEMS) == 3
        assert [i.type for i in items] == ["Camisa", "Calça", "Tênis"]
        assert fresh_store.filter_clothing_items(occasion=["trabalho"]) == items[:2]
