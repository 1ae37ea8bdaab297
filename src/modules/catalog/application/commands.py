"""Catalog application commands."""

from pydantic import BaseModel, ConfigDict


class DeleteToneModelCommand(BaseModel):
    """Delete (soft) a tone model.

    ``profile_id`` is the owner named by the client; ``caller_profile_id`` is
    the authenticated caller. Both must match the model's owner.
    """

    model_config = ConfigDict(protected_namespaces=())

    model_id: str
    profile_id: str
    caller_profile_id: str
