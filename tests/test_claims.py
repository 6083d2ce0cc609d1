"""Claim orchestration tests."""

from __future__ import annotations

import asyncio
import random

import pytest

from leaderboard.core import InvalidRequest, NotFound, ValidationError
from leaderboard.services.claims import ClaimService, parse_user_id
from leaderboard.storage import MemoryStorage


class TestParseUserId:
    @pytest.mark.parametrize("raw, expected", [(1, 1), ("7", 7), (" 42 ", 42), (999999, 999999)])
    def test_accepts_positive_integers(self, raw, expected):
        assert parse_user_id(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "", "12abc", "1.5", "-3", "0", 0, -1, True, None, "٣"])
    def test_rejects_everything_else(self, raw):
        with pytest.raises(InvalidRequest):
            parse_user_id(raw)

    def test_invalid_request_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            parse_user_id("nope")


class TestAwards:
    def test_awards_stay_in_range_and_cover_all_values(self):
        service = ClaimService(MemoryStorage(seed=False), rng=random.Random(2024))
        draws = [service.draw_points() for _ in range(10_000)]
        assert min(draws) >= 1
        assert max(draws) <= 10
        assert set(draws) == set(range(1, 11))

    async def test_seeded_rng_is_deterministic(self, memory_storage):
        expected_rng = random.Random(99)
        expected = [expected_rng.randint(1, 10) for _ in range(5)]

        service = ClaimService(memory_storage, rng=random.Random(99))
        awarded = [(await service.claim_points(1)).points_awarded for _ in range(5)]
        assert awarded == expected


class TestClaimPoints:
    async def test_claim_credits_user_and_records_history(self, storage):
        service = ClaimService(storage, rng=random.Random(5))
        before = (await storage.get_user(4)).points

        result = await service.claim_points(4)

        assert 1 <= result.points_awarded <= 10
        assert result.user.id == 4
        assert result.user.points == before + result.points_awarded
        assert (await storage.get_user(4)).points == result.user.points

        rows = await storage.get_claim_history()
        assert len(rows) == 1
        assert rows[0].claim.user_id == 4
        assert rows[0].claim.points_awarded == result.points_awarded
        assert rows[0].user.points == result.user.points

    async def test_accepts_string_ids(self, storage):
        result = await ClaimService(storage).claim_points("2")
        assert result.user.name == "Kamal"

    async def test_unknown_user_is_not_found_and_writes_nothing(self, storage):
        service = ClaimService(storage)
        with pytest.raises(NotFound):
            await service.claim_points(999999)
        assert await storage.get_claim_history() == []

    async def test_invalid_id_touches_nothing(self, storage):
        before = [(user.id, user.points) for user in await storage.get_all_users()]
        with pytest.raises(InvalidRequest):
            await ClaimService(storage).claim_points("abc")
        after = [(user.id, user.points) for user in await storage.get_all_users()]
        assert before == after
        assert await storage.get_claim_history() == []

    async def test_points_never_decrease(self, storage):
        service = ClaimService(storage, rng=random.Random(11))
        previous = (await storage.get_user(6)).points
        for _ in range(20):
            current = (await service.claim_points(6)).user.points
            assert current > previous
            previous = current

    async def test_concurrent_claims_for_one_user(self, storage):
        service = ClaimService(storage, rng=random.Random(3))
        initial = (await storage.get_user(7)).points

        first, second = await asyncio.gather(service.claim_points(7), service.claim_points(7))

        final = (await storage.get_user(7)).points
        assert final == initial + first.points_awarded + second.points_awarded
        rows = await storage.get_claim_history()
        assert len(rows) == 2
        assert sorted(row.claim.points_awarded for row in rows) == sorted(
            [first.points_awarded, second.points_awarded]
        )

    async def test_many_concurrent_claims_keep_every_record(self, storage):
        service = ClaimService(storage, rng=random.Random(8))
        initial = (await storage.get_user(7)).points

        results = await asyncio.gather(*(service.claim_points(7) for _ in range(20)))

        final = (await storage.get_user(7)).points
        assert final == initial + sum(result.points_awarded for result in results)
        rows = await storage.get_claim_history(limit=50)
        assert len(rows) == 20
        assert sorted(row.claim.id for row in rows) == list(range(1, 21))

    async def test_claim_on_new_user_shows_in_ranking(self, memory_storage):
        zara = await memory_storage.create_user("Zara")
        service = ClaimService(memory_storage, rng=random.Random(0))
        await service.claim_points(zara.id)

        users = await memory_storage.get_all_users()
        assert users[-1].id == zara.id
        assert users[-1].points >= 1
