from pydantic import AliasChoices, Field

from ..utils.config import EnvSettings

DEFAULT_ENDPOINT = "https://appwrite.racoondevs.com/v1"


class AppwriteConfig(EnvSettings):
    """Connection settings shared by every service talking to Appwrite.

    Inside Appwrite's function runtime the project ID is injected as
    APPWRITE_FUNCTION_PROJECT_ID; elsewhere APPWRITE_PROJECT_ID is used.
    """

    appwrite_endpoint: str = Field(DEFAULT_ENDPOINT, alias="APPWRITE_ENDPOINT")
    appwrite_project_id: str = Field(
        ...,
        validation_alias=AliasChoices(
            "APPWRITE_FUNCTION_PROJECT_ID", "APPWRITE_PROJECT_ID"
        ),
    )
    appwrite_api_key: str = Field(..., alias="APPWRITE_API_KEY")
    appwrite_timeout: float = Field(30.0, alias="APPWRITE_TIMEOUT")
