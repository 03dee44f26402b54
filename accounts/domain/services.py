"""
Account domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from accounts.domain.beta_signup import BetaSignup
from accounts.domain.identity import Identity
from accounts.domain.revocation import (
    BETA_SIGNUPS,
    IDENTITY,
    LICENSES,
    USAGE_BY_CHANNEL,
    USAGE_BY_LICENSE,
    RevocationProgress,
)
from accounts.ports.beta_signup_repository import BetaSignupRepository
from accounts.ports.identity_directory import IdentityDirectory
from accounts.ports.usage_repository import UsageRepository
from core.domain.exceptions import RevocationIncompleteError
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class RevocationCoordinator:
    """
    Removes an identity and everything attached to it.

    The stores offer no transaction across records, so revocation runs
    as ordered steps that are each safe to repeat. A failure stops the
    run and reports how far it got; running it again finishes the job.
    """

    def __init__(
        self,
        identity_directory: IdentityDirectory,
        license_repository: LicenseRepository,
        usage_repository: UsageRepository,
        beta_signup_repository: BetaSignupRepository,
    ):
        self.identity_directory = identity_directory
        self.license_repository = license_repository
        self.usage_repository = usage_repository
        self.beta_signup_repository = beta_signup_repository

    async def revoke(self, identity: Identity) -> RevocationProgress:
        """
        Run every revocation step for an identity.

        Args:
            identity: Resolved target identity

        Returns:
            RevocationProgress with all steps completed

        Raises:
            RevocationIncompleteError: If a step failed; carries the progress
        """
        progress = RevocationProgress(identity_id=identity.id, email=identity.email)

        await self._run(progress, USAGE_BY_LICENSE, self._delete_usage_by_license)
        await self._run(
            progress, USAGE_BY_CHANNEL, lambda p: self._delete_usage_by_channel(p, identity)
        )
        await self._run(progress, BETA_SIGNUPS, self._delete_signups)
        await self._run(progress, LICENSES, self._delete_licenses)
        await self._run(
            progress,
            IDENTITY,
            lambda p: self.identity_directory.delete_identity(identity.id),
        )
        return progress

    async def _run(self, progress: RevocationProgress, step: str, action) -> None:
        try:
            await action(progress)
        except Exception as exc:
            logger.error(
                "Revocation of identity %s failed at step %s: %s",
                progress.identity_id,
                step,
                exc,
                exc_info=True,
            )
            raise RevocationIncompleteError(progress, step) from exc
        progress.completed_steps.append(step)

    async def _delete_usage_by_license(self, progress: RevocationProgress) -> None:
        if progress.email:
            owned = await self.license_repository.find_by_owner(progress.email)
            progress.license_keys = [license.key for license in owned]
        if progress.license_keys:
            progress.deleted_usage_count += await self.usage_repository.delete_by_license_keys(
                progress.license_keys
            )

    async def _delete_usage_by_channel(
        self, progress: RevocationProgress, identity: Identity
    ) -> None:
        if identity.channel_identifier:
            progress.deleted_usage_count += (
                await self.usage_repository.delete_by_channel_identifier(
                    identity.channel_identifier
                )
            )

    async def _delete_signups(self, progress: RevocationProgress) -> None:
        if progress.email:
            progress.deleted_signup_count += await self.beta_signup_repository.delete_by_email(
                progress.email
            )

    async def _delete_licenses(self, progress: RevocationProgress) -> None:
        if not progress.email:
            return
        # Licenses issued since the usage step still need their usage removed.
        owned = await self.license_repository.find_by_owner(progress.email)
        late_keys = [lic.key for lic in owned if lic.key not in progress.license_keys]
        if late_keys:
            progress.license_keys.extend(late_keys)
            progress.deleted_usage_count += await self.usage_repository.delete_by_license_keys(
                late_keys
            )
        progress.deleted_license_count += await self.license_repository.delete_by_owner(
            progress.email
        )


@dataclass(frozen=True)
class Tester:
    """One entry of the public tester roster."""

    display: str
    channel: Optional[str] = None


class TesterRoster:
    """Builds the public list of beta testers without exposing emails."""

    @staticmethod
    def build(
        channel_identifiers: Iterable[str], approved_signups: Iterable[BetaSignup]
    ) -> List[Tester]:
        """
        Merge linked channel handles and approved signups into one list.

        Linked profiles come first. A signup without a channel handle is
        listed by first name only. Entries are de-duplicated case-insensitively.

        Args:
            channel_identifiers: Handles linked to profiles
            approved_signups: Approved beta signups

        Returns:
            List of Tester entries
        """
        seen = set()
        testers: List[Tester] = []

        def add(dedupe_key: str, tester: Tester) -> None:
            if dedupe_key not in seen:
                seen.add(dedupe_key)
                testers.append(tester)

        for handle in channel_identifiers:
            handle = (handle or "").strip()
            if handle:
                add(handle.lower(), Tester(display=handle, channel=handle))

        for signup in approved_signups:
            handle = (signup.channel_identifier or "").strip()
            if handle:
                add(handle.lower(), Tester(display=handle, channel=handle))
                continue
            first_name = signup.first_name
            if first_name:
                add("name_" + first_name.lower(), Tester(display=first_name))

        return testers
