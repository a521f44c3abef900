"""Image and video generation for cards, one request of each kind at a time."""

from __future__ import annotations

import logging

from otterboard.api import AiService
from otterboard.errors import OtterboardError
from otterboard.model.board import attach_generated_image, attach_generated_video, find_card
from otterboard.model.session import BoardSession

logger = logging.getLogger(__name__)


class InFlight:
    """A single slot naming the card whose request is pending, if any."""

    def __init__(self) -> None:
        self.card_id: str | None = None

    @property
    def busy(self) -> bool:
        return self.card_id is not None

    def acquire(self, card_id: str) -> bool:
        if self.card_id is not None:
            return False
        self.card_id = card_id
        return True

    def release(self) -> None:
        self.card_id = None


class MediaGenerator:
    """Runs generation calls and attaches results to cards by id.

    A request made while the matching slot is taken is refused before
    any network call. Image requests are also refused while a video is
    being generated. Results land on whichever position the card has
    moved to; if the card is gone, or the board was closed, the result is
    dropped.
    """

    def __init__(self, session: BoardSession, ai: AiService) -> None:
        self.session = session
        self.ai = ai
        self.image = InFlight()
        self.video = InFlight()

    def _card_text(self, card_id: str) -> str | None:
        snapshot = self.session.snapshot
        if snapshot is None:
            return None
        location = find_card(snapshot, card_id)
        if location is None:
            return None
        group, index = location
        return snapshot.themes[group].notes[index].text

    async def generate_image(self, card_id: str) -> bool:
        """Generate and attach an image. Returns False if refused or failed."""
        if self.image.busy or self.video.busy:
            return False
        prompt = self._card_text(card_id)
        if prompt is None:
            return False
        self.image.acquire(card_id)
        token = self.session.token
        try:
            url = await self.ai.generate_image(prompt)
        except OtterboardError as exc:
            logger.warning("image generation for %s failed: %s", card_id, exc)
            if self.session.is_active(token):
                self.session.report_error(f"Image generation failed: {exc}")
            return False
        finally:
            self.image.release()
        if not self.session.is_active(token):
            logger.debug("dropping image for %s: board closed", card_id)
            return False
        self.session.apply(attach_generated_image, card_id, url)
        return True

    async def generate_video(self, card_id: str) -> bool:
        """Generate and attach a video. Returns False if refused or failed."""
        if self.video.busy:
            return False
        prompt = self._card_text(card_id)
        if prompt is None:
            return False
        self.video.acquire(card_id)
        token = self.session.token
        try:
            url = await self.ai.generate_video(prompt)
        except OtterboardError as exc:
            logger.warning("video generation for %s failed: %s", card_id, exc)
            if self.session.is_active(token):
                self.session.report_error(f"Video generation failed: {exc}")
            return False
        finally:
            self.video.release()
        if not self.session.is_active(token):
            logger.debug("dropping video for %s: board closed", card_id)
            return False
        self.session.apply(attach_generated_video, card_id, url)
        return True
