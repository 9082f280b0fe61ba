from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Quotation header defaults, overridden per quote by the caller
    COMPANY_NAME: str = "Your Company Name"
    COMPANY_ADDRESS: str = "123 Workshop Lane, Industrial Area, City, State - 123456"
    COMPANY_EMAIL: str = "contact@yourcompany.com"
    COMPANY_PHONE: str = "+91 98765 43210"
    COMPANY_GST: str = "YOUR_GSTIN"
    COMPANY_WEBSITE: str = "www.yourcompany.com"
    QUOTE_TERMS: str = (
        "1. 50% advance payment required.\n"
        "2. GST @ 18% applicable extra.\n"
        "3. Validity: 15 days."
    )
    CURRENCY_SYMBOL: str = "Rs."  # Built-in PDF fonts are latin-1 only

    # Design suggestions; an empty key disables the feature
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_TIMEOUT_SECONDS: int = 30

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
