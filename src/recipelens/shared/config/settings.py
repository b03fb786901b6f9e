from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CustomLabelsConfig(BaseModel):
    """A trained Rekognition Custom Labels model version."""

    project_arn: str
    model_arn: str
    model_version: str = ""
    min_confidence: float = 50.0


class Settings(BaseSettings):
    # General
    LOG_LEVEL: str = Field(default="INFO", description="Application log level")
    BIND: str = Field(default="0.0.0.0:8080", description="API bind address")

    # CORS
    CORS_ALLOW_ORIGINS: str = Field(default="*", description="Comma-separated list of allowed origins")
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True, description="Allow credentials in CORS")
    CORS_ALLOW_METHODS: str = Field(default="*", description="Allowed CORS methods")
    CORS_ALLOW_HEADERS: str = Field(default="*", description="Allowed CORS headers")

    # AWS
    AWS_REGION: str = Field(default="us-east-1", description="AWS region for every client")
    S3_BUCKET: str = Field(default="", description="Bucket for uploaded images; empty disables archiving")

    # Rekognition
    REKOGNITION_MAX_LABELS: int = Field(default=100, description="Max labels per detect_labels call")
    REKOGNITION_MIN_CONFIDENCE: float = Field(default=50.0, description="Minimum label confidence")
    REKOGNITION_PROJECT_ARN: str = Field(default="", description="Custom Labels project ARN")
    REKOGNITION_MODEL_ARN: str = Field(default="", description="Custom Labels model version ARN")
    REKOGNITION_MODEL_VERSION: str = Field(default="", description="Custom Labels version name")

    # Bedrock
    BEDROCK_MODEL_ID: str = Field(
        default="anthropic.claude-3-haiku-20240307-v1:0",
        description="Bedrock model ID",
    )
    BEDROCK_ANTHROPIC_VERSION: str = Field(default="bedrock-2023-05-31", description="Messages API version tag")
    BEDROCK_MAX_TOKENS: int = Field(default=2048, description="Maximum token count")

    # Data Layer
    MONGODB_URI: str = Field(
        default="mongodb://mongo:27017/recipelens",
        description="MongoDB connection URI",
        validation_alias="MONGO_URI",
    )
    MONGODB_DB: str = Field(
        default="recipelens",
        description="MongoDB database name",
        validation_alias="MONGO_DB",
    )
    USERS_COLLECTION: str = Field(default="users")
    RECIPES_COLLECTION: str = Field(default="recipes")

    # Auth
    JWT_SECRET: str = Field(
        default="dev-secret-key-change-in-production-0000",
        description="HMAC secret for signing tokens",
    )
    JWT_ALGORITHM: str = Field(default="HS256")
    JWT_EXPIRY_HOURS: int = Field(default=24, description="Token lifetime in hours")

    # Uploads
    MAX_UPLOAD_BYTES: int = Field(default=16 * 1024 * 1024, description="Largest accepted image")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    def custom_labels(self) -> Optional[CustomLabelsConfig]:
        """The Custom Labels model to use, or None for stock labels."""
        if not (self.REKOGNITION_PROJECT_ARN and self.REKOGNITION_MODEL_ARN):
            return None
        return CustomLabelsConfig(
            project_arn=self.REKOGNITION_PROJECT_ARN,
            model_arn=self.REKOGNITION_MODEL_ARN,
            model_version=self.REKOGNITION_MODEL_VERSION,
            min_confidence=self.REKOGNITION_MIN_CONFIDENCE,
        )


settings = Settings()
