"""Catalog command handlers."""

from loguru import logger

from src.core.infrastructure.logging import BusinessEvents
from src.modules.catalog.application.commands import DeleteToneModelCommand
from src.modules.catalog.domain.exceptions import (
    ToneModelAccessDeniedError,
    ToneModelNotFoundError,
)
from src.modules.catalog.domain.repository import ToneModelRepository


class DeleteToneModelHandler:
    """Handle tone model deletion."""

    def __init__(self, tone_model_repository: ToneModelRepository):
        self.tone_model_repository = tone_model_repository
        self.logger = logger.bind(service="DeleteToneModelHandler")

    async def handle(self, command: DeleteToneModelCommand) -> None:
        if command.profile_id != command.caller_profile_id:
            raise ToneModelAccessDeniedError(command.model_id)

        model = await self.tone_model_repository.get_by_id(command.model_id)
        if model is None:
            raise ToneModelNotFoundError(command.model_id)

        model.delete_by(command.caller_profile_id)
        if not await self.tone_model_repository.soft_delete(model.id):
            raise ToneModelNotFoundError(command.model_id)

        self.logger.info(f"Tone model {model.id} deleted by {command.caller_profile_id}")
        BusinessEvents.tone_model_deleted(
            model_id=model.id,
            profile_id=command.caller_profile_id,
        )
