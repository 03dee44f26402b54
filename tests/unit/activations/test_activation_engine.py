"""
Unit tests for ActivationEngine.
"""
import asyncio
from dataclasses import replace
from datetime import timedelta

import pytest
from django.utils import timezone

from activations.domain.services import ActivationEngine
from core.domain.value_objects import LicenseStatus, ValidationReason

KEY = "VIRI-ABCD-EFGH-JKLM-NPQR"


@pytest.fixture
def stored(memory_license_repository, sample_license):
    """Store a license and return a helper to store variants of it."""

    def store(**changes):
        license = replace(sample_license, **changes)
        memory_license_repository.licenses[KEY] = license
        return license

    store()
    return store


@pytest.mark.asyncio
class TestActivationEngine:
    """Tests for ActivationEngine.validate."""

    async def test_not_found(self, memory_license_repository):
        result = await ActivationEngine.validate(memory_license_repository, "VIRI-NOPE", "m-1")
        assert result.valid is False
        assert result.reason is ValidationReason.NOT_FOUND
        assert result.message == "License key not found."
        assert result.expires_at is None

    async def test_blank_key(self, memory_license_repository):
        result = await ActivationEngine.validate(memory_license_repository, "   ", "m-1")
        assert result.reason is ValidationReason.NOT_FOUND

    async def test_overlong_key_is_not_found(self, memory_license_repository, stored):
        result = await ActivationEngine.validate(memory_license_repository, KEY + "X" * 60, "m-1")
        assert result.reason is ValidationReason.NOT_FOUND
        assert memory_license_repository.licenses[KEY].machine_id is None

    async def test_first_activation_binds(self, memory_license_repository, stored):
        result = await ActivationEngine.validate(memory_license_repository, f"  {KEY} ", " m-1 ")

        assert result.valid is True
        assert result.newly_bound is True
        assert result.message == "License activated."
        license = memory_license_repository.licenses[KEY]
        assert license.machine_id == "m-1"
        assert license.last_seen is not None

    async def test_same_machine_touches(self, memory_license_repository, stored):
        seen = timezone.now() - timedelta(days=2)
        stored(machine_id="m-1", last_seen=seen)

        result = await ActivationEngine.validate(memory_license_repository, KEY, "m-1")

        assert result.valid is True
        assert result.newly_bound is False
        assert memory_license_repository.licenses[KEY].last_seen > seen

    async def test_other_machine_mismatch(self, memory_license_repository, stored):
        stored(machine_id="m-1")

        result = await ActivationEngine.validate(memory_license_repository, KEY, "m-2")

        assert result.valid is False
        assert result.reason is ValidationReason.MACHINE_MISMATCH
        assert result.message == "License is already in use on another machine."
        assert memory_license_repository.licenses[KEY].machine_id == "m-1"

    async def test_no_machine_id_never_binds(self, memory_license_repository, stored):
        result = await ActivationEngine.validate(memory_license_repository, KEY, None)

        assert result.valid is True
        assert result.newly_bound is False
        assert memory_license_repository.licenses[KEY].machine_id is None

    async def test_inactive(self, memory_license_repository, stored):
        stored(status=LicenseStatus.INACTIVE, machine_id="m-1")
        result = await ActivationEngine.validate(memory_license_repository, KEY, "m-2")
        assert result.reason is ValidationReason.INACTIVE
        assert result.message == "License is inactive."

    async def test_expired(self, memory_license_repository, stored):
        stored(expires_at=timezone.now() - timedelta(seconds=1))
        result = await ActivationEngine.validate(memory_license_repository, KEY, "m-1")
        assert result.reason is ValidationReason.EXPIRED
        assert result.message == "License expired."
        assert memory_license_repository.licenses[KEY].machine_id is None

    async def test_expiry_instant_is_still_valid(self, memory_license_repository, stored):
        now = timezone.now()
        stored(expires_at=now)
        result = await ActivationEngine.validate(memory_license_repository, KEY, "m-1", now=now)
        assert result.valid is True

    async def test_racing_first_activations(self, memory_license_repository, stored):
        """Exactly one of two concurrent first activations wins the binding."""
        results = await asyncio.gather(
            ActivationEngine.validate(memory_license_repository, KEY, "m-1"),
            ActivationEngine.validate(memory_license_repository, KEY, "m-2"),
        )

        reasons = sorted(result.reason.value for result in results)
        assert reasons == ["machine_mismatch", "valid"]
        winner = next(result for result in results if result.valid)
        assert winner.newly_bound is True
        winner_machine = "m-1" if results[0].valid else "m-2"
        assert memory_license_repository.licenses[KEY].machine_id == winner_machine

    async def test_lost_binding_rechecks_record(self, memory_license_repository, stored):
        """A caller that loses the binding race re-reads the winner's record."""
        original_find = memory_license_repository.find_by_key
        calls = {"count": 0}

        async def find_by_key(key):
            license = await original_find(key)
            calls["count"] += 1
            if calls["count"] == 1:
                # Another machine binds between this read and our write.
                await memory_license_repository.bind_machine(key, "m-other", timezone.now())
            return license

        memory_license_repository.find_by_key = find_by_key

        result = await ActivationEngine.validate(memory_license_repository, KEY, "m-1")

        assert calls["count"] == 2
        assert result.reason is ValidationReason.MACHINE_MISMATCH

    async def test_lost_binding_to_same_machine_is_valid(
        self, memory_license_repository, stored
    ):
        original_find = memory_license_repository.find_by_key
        calls = {"count": 0}

        async def find_by_key(key):
            license = await original_find(key)
            calls["count"] += 1
            if calls["count"] == 1:
                await memory_license_repository.bind_machine(key, "m-1", timezone.now())
            return license

        memory_license_repository.find_by_key = find_by_key

        result = await ActivationEngine.validate(memory_license_repository, KEY, "m-1")

        assert result.valid is True
        assert result.newly_bound is False
