from __future__ import annotations

from typing import Protocol

from app.schemas.enhance import EnhanceResult
from app.schemas.resume import ResumeDocument
from app.schemas.subscription import Quota


class ResumeStore(Protocol):
    def load_resume(self, user_id: str) -> ResumeDocument | None: ...

    def save_resume(self, user_id: str, document: ResumeDocument) -> None: ...

    def delete_resume(self, user_id: str) -> bool: ...


class SubscriptionService(Protocol):
    def get_quota(self, user_id: str) -> Quota: ...


class TextEnhancer(Protocol):
    def enhance(self, text: str, section_type: str) -> EnhanceResult: ...
