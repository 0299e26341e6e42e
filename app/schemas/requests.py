"""
Request schemas for the job intake API.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr

REQUIRED_JOB_FIELDS = ("job_id", "webhook_url", "webhook_secret")


class ProcessJobRequest(BaseModel):
    """
    Request body for the /process endpoint.

    The three routing fields are declared; every other key is an opaque
    processing parameter passed through to the pipeline untouched. Presence
    and non-emptiness of the routing fields is checked by the route so that
    a missing field is reported as a 400 rather than a schema error.
    """

    job_id: Optional[str] = Field(
        default=None, description="Caller-assigned identifier, unique per caller"
    )
    webhook_url: Optional[str] = Field(
        default=None, description="Absolute URL that receives job status events"
    )
    webhook_secret: Optional[SecretStr] = Field(
        default=None, description="Bearer token sent with every webhook call"
    )

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "job_id": "abc",
                "webhook_url": "https://cb.example/hook",
                "webhook_secret": "s3cr3t",
                "transform": {"layout": {"aspect": "16:9"}},
            }
        },
    )

    @property
    def parameters(self) -> dict[str, Any]:
        """Processing parameters: everything except the routing fields."""
        return dict(self.model_extra or {})

    def missing_fields(self) -> list[str]:
        """Names of required fields that are absent or empty."""
        secret = self.webhook_secret.get_secret_value() if self.webhook_secret else ""
        values = {
            "job_id": self.job_id,
            "webhook_url": self.webhook_url,
            "webhook_secret": secret,
        }
        return [name for name in REQUIRED_JOB_FIELDS if not values[name]]
