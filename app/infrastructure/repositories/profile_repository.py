"""Read access to the profile fields used by the notification engine."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from app.domain.entities import Profile
from app.infrastructure.models import ProfileModel


class ProfileRepository:
    """Retrieve :class:`Profile` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, profile_id: str) -> Profile | None:
        model = self.session.get(ProfileModel, profile_id)
        return self._to_entity(model) if model else None

    def get_map_by_ids(self, profile_ids: Iterable[str]) -> dict[str, Profile]:
        ids = {profile_id for profile_id in profile_ids if profile_id}
        if not ids:
            return {}
        models = self.session.query(ProfileModel).filter(ProfileModel.id.in_(ids)).all()
        return {model.id: self._to_entity(model) for model in models}

    @staticmethod
    def _to_entity(model: ProfileModel) -> Profile:
        return Profile(
            id=model.id,
            full_name=model.full_name,
            notification_preferences=_as_mapping(model.notification_preferences),
            support_preferences=_as_mapping(model.support_preferences),
        )


def _as_mapping(value) -> dict:
    return dict(value) if isinstance(value, dict) else {}


__all__ = ["ProfileRepository"]
