from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "MailRelay"
    debug: bool = False
    log_level: str = "INFO"

    # ASGI server bind address
    host: str = "0.0.0.0"
    port: int = 8080

    # CORS — comma-separated allowed origins (empty = allow all for dev)
    cors_origins: str = ""

    # SendGrid v3 API
    sendgrid_api_base: str = "https://api.sendgrid.com"
    sendgrid_send_path: str = "/v3/mail/send"
    provider_timeout: float = 15

    # Query string parameter carrying the caller's SendGrid key
    api_key_param: str = "sg_key"

    # Inbound request body limit (bytes)
    max_body_size: int = 2 * 1024 * 1024

    model_config = {"env_file": ".env", "env_prefix": "MAILRELAY_", "extra": "ignore"}


settings = Settings()
