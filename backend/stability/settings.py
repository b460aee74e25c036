from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
	# Database
	database_url: str | None = Field(default=None, validation_alias="DATABASE_URL")
	# Seconds to wait on a locked/unreachable database before giving up
	store_timeout_seconds: int = Field(default=10, validation_alias="STORE_TIMEOUT_SECONDS")

	# Composite scoring: "strict" rejects weight sets that do not sum to 1, "normalize" rescales them
	weight_policy: str = Field(default="strict", validation_alias="WEIGHT_POLICY")
	weight_tolerance: float = Field(default=1e-6, validation_alias="WEIGHT_TOLERANCE")

	# SendGrid report delivery (optional; reports are refused when no key is set)
	sendgrid_api_key: str | None = Field(default=None, validation_alias="SENDGRID_API_KEY")
	sendgrid_from_email: str = Field(default="info@n-blk.com", validation_alias="SENDGRID_FROM_EMAIL")
	sendgrid_base_url: str = Field(default="https://api.sendgrid.com/v3/mail/send", validation_alias="SENDGRID_BASE_URL")
	delivery_timeout_seconds: int = Field(default=30, validation_alias="DELIVERY_TIMEOUT_SECONDS")
	delivery_max_attempts: int = Field(default=2, validation_alias="DELIVERY_MAX_ATTEMPTS")

	# Report layout
	report_contact_email: str = Field(default="info@n-blk.com", validation_alias="REPORT_CONTACT_EMAIL")
	report_organization: str = Field(default="NBLK Consulting", validation_alias="REPORT_ORGANIZATION")

	# Comma separated list of origins allowed to call the API from a browser
	allowed_origins: str = Field(default="http://localhost:5173", validation_alias="ALLOWED_ORIGINS")

	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

	@property
	def origins(self) -> list[str]:
		return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

settings = Settings()
