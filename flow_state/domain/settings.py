"""Registry configuration."""

from pydantic import BaseModel, ConfigDict, Field


class RegistrySettings(BaseModel):
    """
    Configuration of a FlowStateController.
    Defaults reproduce the plain, unsynchronised registry behaviour.
    """

    model_config = ConfigDict(frozen=True)

    serialize_per_key: bool = Field(
        default=False,
        description=(
            "Hold a per-key lock for the whole execute() flow so overlapping "
            "executions on one key run one after another"
        ),
    )
    strict_payload_types: bool = Field(
        default=True,
        description=(
            "Raise PayloadTypeMismatchError when a key is used with a payload type "
            "other than the one it was first declared with"
        ),
    )
