"""
Unit tests for beta signups and the public tester roster.
"""
from dataclasses import replace
from datetime import datetime, timezone

import pytest

from accounts.application.commands.approve_beta_signup import ApproveBetaSignupCommand
from accounts.application.commands.submit_beta_signup import SubmitBetaSignupCommand
from accounts.application.handlers.beta_signup_handlers import (
    ApproveBetaSignupHandler,
    SubmitBetaSignupHandler,
)
from accounts.domain.beta_signup import BetaSignup
from accounts.domain.services import Tester, TesterRoster
from accounts.ports.beta_signup_repository import BetaSignupRepository
from conftest import sequence_keys
from core.domain.exceptions import (
    AdminRequiredError,
    BetaSignupNotFoundError,
    DuplicateSignupError,
)
from core.domain.value_objects import SignupStatus
from licenses.application.handlers.issue_license_handler import IssueFromApprovalHandler

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


class InMemoryBetaSignupRepository(BetaSignupRepository):
    def __init__(self):
        self.signups = {}

    async def find_by_id(self, signup_id):
        return self.signups.get(signup_id)

    async def find_by_email(self, email):
        return next((s for s in self.signups.values() if s.email == email), None)

    async def create(self, signup):
        if await self.find_by_email(signup.email):
            raise DuplicateSignupError()
        signup = replace(signup, id=len(self.signups) + 1)
        self.signups[signup.id] = signup
        return signup

    async def mark_approved(self, signup_id, license_key, approved_at):
        if signup_id not in self.signups:
            return False
        self.signups[signup_id] = self.signups[signup_id].approve(license_key, approved_at)
        return True

    async def delete_by_email(self, email):
        ids = [i for i, s in self.signups.items() if s.email == email]
        for signup_id in ids:
            del self.signups[signup_id]
        return len(ids)

    async def list_approved(self):
        return [s for s in self.signups.values() if s.status is SignupStatus.APPROVED]

    async def status_by_emails(self, emails):
        return {s.email: s.status.value for s in self.signups.values() if s.email in emails}


def signup(name, email, channel="", status=SignupStatus.APPROVED):
    return replace(
        BetaSignup.create(
            name="placeholder", email=email, channel_identifier="placeholder", now=NOW
        ),
        name=name,
        channel_identifier=channel,
        status=status,
    )


class TestBetaSignupEntity:
    """Tests for the BetaSignup entity."""

    def test_create_normalizes(self):
        created = BetaSignup.create(
            name="  Ada Lovelace ",
            email=" Ada@Example.com ",
            channel_identifier=" AdaPlays ",
            content_type="",
            message="   ",
            now=NOW,
        )
        assert created.id is None
        assert created.name == "Ada Lovelace"
        assert created.email == "ada@example.com"
        assert created.channel_identifier == "AdaPlays"
        assert created.content_type is None
        assert created.message is None
        assert created.status is SignupStatus.PENDING
        assert created.license_key is None
        assert created.created_at == NOW

    @pytest.mark.parametrize(
        "name,email,channel",
        [("", "a@example.com", "chan"), ("Ada", " ", "chan"), ("Ada", "a@example.com", "  ")],
    )
    def test_create_requires_fields(self, name, email, channel):
        with pytest.raises(ValueError, match="required"):
            BetaSignup.create(name=name, email=email, channel_identifier=channel)

    @pytest.mark.parametrize("email", ["ada", "ada@example", "ada @example.com"])
    def test_create_rejects_malformed_email(self, email):
        with pytest.raises(ValueError, match="Invalid email"):
            BetaSignup.create(name="Ada", email=email, channel_identifier="chan")

    def test_approve(self):
        pending = BetaSignup.create(name="Ada", email="ada@example.com", channel_identifier="c")
        approved = pending.approve("VIRI-AAAA-BBBB-CCCC-DDDD", now=NOW)
        assert approved.status is SignupStatus.APPROVED
        assert approved.license_key == "VIRI-AAAA-BBBB-CCCC-DDDD"
        assert approved.approved_at == NOW
        assert pending.status is SignupStatus.PENDING


class TestTesterRoster:
    """Tests for TesterRoster.build."""

    def test_profiles_first_then_signups(self):
        testers = TesterRoster.build(
            ["ProfileOne", " ", None],
            [signup("Grace Hopper", "grace@example.com", channel="GraceLive")],
        )
        assert testers == [
            Tester(display="ProfileOne", channel="ProfileOne"),
            Tester(display="GraceLive", channel="GraceLive"),
        ]

    def test_deduplicates_case_insensitively(self):
        testers = TesterRoster.build(
            ["StreamerX", "streamerx"],
            [signup("Someone", "s@example.com", channel="STREAMERX")],
        )
        assert testers == [Tester(display="StreamerX", channel="StreamerX")]

    def test_signup_without_channel_uses_first_name(self):
        testers = TesterRoster.build(
            [],
            [
                signup("Linus Torvalds", "l1@example.com"),
                signup("linus", "l2@example.com"),
                signup("   ", "blank@example.com"),
            ],
        )
        assert testers == [Tester(display="Linus")]

    def test_first_name_does_not_collide_with_channel(self):
        testers = TesterRoster.build(["linus"], [signup("Linus", "l@example.com")])
        assert testers == [
            Tester(display="linus", channel="linus"),
            Tester(display="Linus"),
        ]

    def test_never_exposes_email(self):
        testers = TesterRoster.build([], [signup("Ada", "ada@example.com")])
        assert all("@" not in t.display for t in testers)


@pytest.mark.asyncio
class TestSubmitBetaSignupHandler:
    """Tests for SubmitBetaSignupHandler."""

    async def test_submit(self):
        repository = InMemoryBetaSignupRepository()
        handler = SubmitBetaSignupHandler(repository)

        result = await handler.handle(
            SubmitBetaSignupCommand(
                name="Ada", email="Ada@Example.com", channel_identifier="AdaPlays"
            )
        )

        assert result.id == 1
        assert result.email == "ada@example.com"
        assert result.status == "pending"

    async def test_duplicate_email(self):
        repository = InMemoryBetaSignupRepository()
        handler = SubmitBetaSignupHandler(repository)
        command = SubmitBetaSignupCommand(
            name="Ada", email="ada@example.com", channel_identifier="AdaPlays"
        )
        await handler.handle(command)

        with pytest.raises(DuplicateSignupError):
            await handler.handle(replace(command, email="ADA@example.com"))


@pytest.mark.asyncio
class TestApproveBetaSignupHandler:
    """Tests for ApproveBetaSignupHandler."""

    @pytest.fixture
    def setup(self, memory_license_repository, licensing_config):
        repository = InMemoryBetaSignupRepository()
        issue_handler = IssueFromApprovalHandler(
            memory_license_repository,
            licensing_config,
            key_generator=sequence_keys(
                "VIRI-AAAA-AAAA-AAAA-AAAA", "VIRI-BBBB-BBBB-BBBB-BBBB"
            ),
        )
        return repository, ApproveBetaSignupHandler(repository, issue_handler)

    async def test_approve_issues_license(self, setup, memory_license_repository):
        repository, handler = setup
        created = await repository.create(
            BetaSignup.create(name="Ada", email="ada@example.com", channel_identifier="c")
        )

        result = await handler.handle(
            ApproveBetaSignupCommand(signup_id=created.id, requester_is_admin=True)
        )

        assert result.status == "approved"
        assert result.license_key == "VIRI-AAAA-AAAA-AAAA-AAAA"
        issued = memory_license_repository.licenses["VIRI-AAAA-AAAA-AAAA-AAAA"]
        assert issued.owner_email == "ada@example.com"
        assert issued.expires_at is not None
        assert repository.signups[created.id].license_key == result.license_key

    async def test_reapproval_issues_new_key(self, setup, memory_license_repository):
        repository, handler = setup
        created = await repository.create(
            BetaSignup.create(name="Ada", email="ada@example.com", channel_identifier="c")
        )
        command = ApproveBetaSignupCommand(signup_id=created.id, requester_is_admin=True)

        await handler.handle(command)
        second = await handler.handle(command)

        assert second.license_key == "VIRI-BBBB-BBBB-BBBB-BBBB"
        assert len(memory_license_repository.licenses) == 2

    async def test_requires_admin(self, setup, memory_license_repository):
        _, handler = setup
        with pytest.raises(AdminRequiredError):
            await handler.handle(ApproveBetaSignupCommand(signup_id=1, requester_is_admin=False))
        assert memory_license_repository.licenses == {}

    async def test_unknown_signup(self, setup, memory_license_repository):
        _, handler = setup
        with pytest.raises(BetaSignupNotFoundError):
            await handler.handle(ApproveBetaSignupCommand(signup_id=42, requester_is_admin=True))
        assert memory_license_repository.licenses == {}
