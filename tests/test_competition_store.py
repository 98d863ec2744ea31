"""
Unit tests for the competition store and its recording rules.
"""

import threading
import pytest

from test_utils import CompetitionFactory, store, vaulter_id, thrower_id

from adapters.persistence.competition_codec import encode
from core.exceptions import (
    CompetitorNotFoundError, EliminationRuleError, WrongCategoryError,
    AttemptLimitError, ValidationError, DomainException
)
from domain.models import Competition, DisciplineCategory, PoleVaultAttempt
from domain.services.competition_store import (
    CompetitionStore, find_elimination_height, MAX_JUMP_ATTEMPTS, MAX_SHOT_ATTEMPTS
)


class TestDocumentLifecycle:
    """Creating, installing and snapshotting the document."""

    def test_create_competition_replaces_document(self, store, vaulter_id):
        competition = store.create_competition("Autumn Meet")

        assert competition == Competition(name="Autumn Meet")
        assert store.snapshot() == competition
        assert store.snapshot().competitors == ()

    def test_default_store_is_empty(self):
        assert CompetitionStore().snapshot() == Competition()

    def test_install_replaces_document(self, store):
        competition = CompetitionFactory.full_competition()
        store.install(competition)

        assert store.snapshot() == competition
        assert store.get_competitor("thrower-1").shot_distance == 9.1

    def test_install_rejects_duplicate_ids(self, store):
        vaulter = CompetitionFactory.vaulter()
        with pytest.raises(ValidationError):
            store.install(Competition(name="Dup", competitors=(vaulter, vaulter)))
        assert store.snapshot().name == "Test Meet"

    def test_snapshot_is_unaffected_by_later_mutations(self, store, vaulter_id):
        before = store.snapshot()
        store.set_sprint_time(vaulter_id, 8.1)

        assert before.find(vaulter_id).sprint_time is None
        assert store.snapshot().find(vaulter_id).sprint_time == 8.1


class TestRoster:
    """Adding and looking up competitors."""

    def test_add_competitor_starts_without_results(self, store):
        competitor_id = store.add_competitor("Alex", DisciplineCategory.TRACK_VAULT)
        competitor = store.get_competitor(competitor_id)

        assert competitor.name == "Alex"
        assert competitor.discipline_category is DisciplineCategory.TRACK_VAULT
        assert competitor.pole_vault_attempts is None
        assert competitor.sprint_time is None
        assert competitor.climbing_time is None
        assert competitor.jump_attempts is None
        assert competitor.shot_distance is None
        assert competitor.shot_attempts is None
        assert competitor.throw_sprint_time is None

    def test_ids_are_pairwise_distinct(self, store):
        ids = [store.add_competitor(f"Athlete {i}", "Stab") for i in range(50)]

        assert len(set(ids)) == len(ids)
        assert list(store.snapshot().competitor_ids) == ids

    def test_roster_keeps_insertion_order(self, store):
        names = ["Charlie", "alice", "Bob"]
        for name in names:
            store.add_competitor(name, DisciplineCategory.FIELD_THROW)

        assert [c.name for c in store.snapshot().competitors] == names

    @pytest.mark.parametrize("tag,expected", [
        ("Stab", DisciplineCategory.TRACK_VAULT),
        ("Wurf", DisciplineCategory.FIELD_THROW),
        ("field_throw", DisciplineCategory.FIELD_THROW),
    ])
    def test_category_accepts_persisted_tags(self, store, tag, expected):
        competitor_id = store.add_competitor("Alex", tag)
        assert store.get_competitor(competitor_id).discipline_category is expected

    def test_unknown_category_rejected(self, store):
        with pytest.raises(ValidationError):
            store.add_competitor("Alex", "Schwimmen")
        assert store.snapshot().competitors == ()

    def test_get_unknown_competitor(self, store):
        with pytest.raises(CompetitorNotFoundError) as exc_info:
            store.get_competitor("missing")
        assert exc_info.value.competitor_id == "missing"


class TestOverwritableResults:
    """Sprint, climbing, shot put distance and throw sprint times."""

    def test_last_write_wins(self, store, vaulter_id):
        store.set_sprint_time(vaulter_id, 8.4)
        store.set_sprint_time(vaulter_id, 7.9)
        store.set_climbing_time(vaulter_id, 14.0)

        competitor = store.get_competitor(vaulter_id)
        assert competitor.sprint_time == 7.9
        assert competitor.climbing_time == 14.0

    def test_shot_put_distance_and_throw_sprint(self, store, thrower_id):
        store.set_shot_put_distance(thrower_id, 9.75)
        store.set_throw_sprint_time(thrower_id, 8.3)

        competitor = store.get_competitor(thrower_id)
        assert competitor.shot_distance == 9.75
        assert competitor.throw_sprint_time == 8.3
        assert competitor.sprint_time is None

    def test_no_range_validation(self, store, vaulter_id):
        store.set_sprint_time(vaulter_id, -1)
        store.set_climbing_time(vaulter_id, 0)

        competitor = store.get_competitor(vaulter_id)
        assert competitor.sprint_time == -1.0
        assert competitor.climbing_time == 0.0

    @pytest.mark.parametrize("bad_value", ["7.9", None, True, float("nan"), float("inf"), 10 ** 400])
    def test_non_numeric_or_non_finite_rejected(self, store, vaulter_id, bad_value):
        with pytest.raises(ValidationError):
            store.set_sprint_time(vaulter_id, bad_value)
        assert store.get_competitor(vaulter_id).sprint_time is None


class TestPoleVault:
    """Pole vault attempts and the elimination rule."""

    def test_attempts_kept_in_order(self, store, vaulter_id):
        store.record_pole_vault_attempt(vaulter_id, 1.8, True)
        store.record_pole_vault_attempt(vaulter_id, 2.0, False)
        store.record_pole_vault_attempt(vaulter_id, 1.9, True)

        assert store.get_competitor(vaulter_id).pole_vault_attempts == (
            PoleVaultAttempt(1.8, True),
            PoleVaultAttempt(2.0, False),
            PoleVaultAttempt(1.9, True),
        )

    def test_two_failures_do_not_block_higher_height(self, store, vaulter_id):
        store.record_pole_vault_attempt(vaulter_id, 2.0, False)
        store.record_pole_vault_attempt(vaulter_id, 2.0, False)
        store.record_pole_vault_attempt(vaulter_id, 2.1, False)

        assert store.get_competitor(vaulter_id).pole_vault_attempt_count == 3

    def test_three_failures_block_higher_height(self, store, vaulter_id):
        for _ in range(3):
            store.record_pole_vault_attempt(vaulter_id, 2.0, False)

        with pytest.raises(EliminationRuleError) as exc_info:
            store.record_pole_vault_attempt(vaulter_id, 2.1, True)

        assert exc_info.value.blocking_height == 2.0
        assert exc_info.value.failures == 3
        assert store.get_competitor(vaulter_id).pole_vault_attempt_count == 3

    def test_failures_spread_over_heights_do_not_block(self, store, vaulter_id):
        for height in (1.8, 1.8, 1.9, 1.9, 2.0, 2.0):
            store.record_pole_vault_attempt(vaulter_id, height, False)

        store.record_pole_vault_attempt(vaulter_id, 2.1, True)
        assert store.get_competitor(vaulter_id).pole_vault_attempt_count == 7

    def test_same_or_lower_height_still_allowed(self, store, vaulter_id):
        for _ in range(3):
            store.record_pole_vault_attempt(vaulter_id, 2.0, False)

        store.record_pole_vault_attempt(vaulter_id, 2.0, False)
        store.record_pole_vault_attempt(vaulter_id, 1.9, True)
        assert store.get_competitor(vaulter_id).pole_vault_attempt_count == 5

    def test_successes_never_count_as_failures(self, store, vaulter_id):
        for _ in range(3):
            store.record_pole_vault_attempt(vaulter_id, 2.0, True)

        store.record_pole_vault_attempt(vaulter_id, 2.2, False)
        assert store.get_competitor(vaulter_id).pole_vault_attempt_count == 4

    def test_height_comparison_is_exact(self):
        attempts = [PoleVaultAttempt(0.1 + 0.2, False)] * 3

        assert find_elimination_height(attempts, 0.35) == (0.1 + 0.2, 3)
        assert find_elimination_height(attempts, 0.1 + 0.2) is None

    def test_pole_vault_is_not_category_gated(self, store, thrower_id):
        store.record_pole_vault_attempt(thrower_id, 1.5, True)
        assert store.highest_cleared_height(thrower_id) == 1.5

    def test_successful_must_be_boolean(self, store, vaulter_id):
        with pytest.raises(ValidationError):
            store.record_pole_vault_attempt(vaulter_id, 2.0, "yes")


class TestFieldAttempts:
    """Jump and shot put attempts with category gate and caps."""

    def test_shot_attempt_cap(self, store, thrower_id):
        for distance in (7.0, 7.5, 8.0, 8.5, 9.0):
            store.record_shot_attempt(thrower_id, distance)

        with pytest.raises(AttemptLimitError) as exc_info:
            store.record_shot_attempt(thrower_id, 9.5)

        assert exc_info.value.limit == MAX_SHOT_ATTEMPTS
        assert store.get_competitor(thrower_id).shot_attempt_count == 5

    def test_jump_attempt_cap(self, store, thrower_id):
        store.record_jump_attempt(thrower_id, 10.1)
        store.record_jump_attempt(thrower_id, 10.4)

        with pytest.raises(AttemptLimitError):
            store.record_jump_attempt(thrower_id, 10.9)

        competitor = store.get_competitor(thrower_id)
        assert [a.distance for a in competitor.jump_attempts] == [10.1, 10.4]
        assert competitor.jump_attempt_count == MAX_JUMP_ATTEMPTS

    def test_track_vault_competitor_cannot_jump(self, store, vaulter_id):
        before = encode(store.snapshot())

        with pytest.raises(WrongCategoryError):
            store.record_jump_attempt(vaulter_id, 10.0)
        with pytest.raises(WrongCategoryError):
            store.record_shot_attempt(vaulter_id, 8.0)

        assert encode(store.snapshot()) == before


class TestQueries:
    """Highest cleared height."""

    def test_highest_cleared_height(self, store, vaulter_id):
        store.record_pole_vault_attempt(vaulter_id, 1.8, True)
        store.record_pole_vault_attempt(vaulter_id, 2.0, True)
        store.record_pole_vault_attempt(vaulter_id, 2.1, False)

        assert store.highest_cleared_height(vaulter_id) == 2.0

    def test_no_clearance_and_unknown_competitor_both_none(self, store, vaulter_id):
        assert store.highest_cleared_height(vaulter_id) is None

        store.record_pole_vault_attempt(vaulter_id, 1.8, False)
        assert store.highest_cleared_height(vaulter_id) is None
        assert store.highest_cleared_height("missing") is None


class TestNotFound:
    """Mutations on unknown ids leave the document byte-for-byte unchanged."""

    @pytest.mark.parametrize("operation,args", [
        ("set_sprint_time", (7.5,)),
        ("set_climbing_time", (11.0,)),
        ("set_shot_put_distance", (9.0,)),
        ("set_throw_sprint_time", (8.0,)),
        ("record_pole_vault_attempt", (2.0, True)),
        ("record_jump_attempt", (10.0,)),
        ("record_shot_attempt", (9.0,)),
    ])
    @pytest.mark.parametrize("missing_id", ["no-such-id", ""])
    def test_unknown_id(self, store, vaulter_id, thrower_id, operation, args, missing_id):
        store.record_pole_vault_attempt(vaulter_id, 1.8, True)
        before = encode(store.snapshot())

        with pytest.raises(CompetitorNotFoundError):
            getattr(store, operation)(missing_id, *args)

        assert encode(store.snapshot()) == before

    def test_not_found_is_a_domain_exception(self, store):
        with pytest.raises(DomainException):
            store.set_sprint_time("no-such-id", 7.0)

    def test_non_string_id_rejected(self, store):
        with pytest.raises(ValidationError):
            store.set_sprint_time(42, 7.0)

    def test_get_competitor_with_empty_id(self, store):
        with pytest.raises(CompetitorNotFoundError):
            store.get_competitor("")


class TestConcurrency:
    """Concurrent writers never lose updates."""

    def test_parallel_attempts_are_all_recorded(self, store):
        ids = [store.add_competitor(f"Vaulter {i}", "Stab") for i in range(8)]

        def record(competitor_id):
            for i in range(20):
                store.record_pole_vault_attempt(competitor_id, 1.0 + i / 100, True)

        threads = [threading.Thread(target=record, args=(cid,)) for cid in ids]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        snapshot = store.snapshot()
        assert [c.id for c in snapshot.competitors] == ids
        assert all(c.pole_vault_attempt_count == 20 for c in snapshot.competitors)
