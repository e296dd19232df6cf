from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Notifier settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service
    service_name: str = "bulk-notifier"

    # SendGrid (Email)
    sendgrid_api_key: str = ""
    sendgrid_url: str = "https://api.sendgrid.com/v3/mail/send"
    email_from: str = "noreply@wyandotte.com"
    email_from_name: str = "Wyandotte TR"

    # Netgsm (SMS, primary)
    netgsm_username: str = ""
    netgsm_password: str = ""
    netgsm_msgheader: str = "WYANDOTTE"
    netgsm_url: str = "https://api.netgsm.com.tr/sms/send/get"

    # Iletimerkezi (SMS, secondary)
    iletimerkezi_username: str = ""
    iletimerkezi_password: str = ""
    iletimerkezi_msgheader: str = "WYANDOTTE"
    iletimerkezi_url: str = "https://api.iletimerkezi.com/v1/send-sms"
