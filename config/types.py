from typing import Optional
from pydantic import BaseModel


class WebpageSettings(BaseModel):
    """Model representing the resolved webpage settings"""

    timeout: float = 30.0
    user_agent: Optional[str] = None
    browser_type: str = "chromium"
    output_path: str = "output"
    log_level: str = "WARNING"
