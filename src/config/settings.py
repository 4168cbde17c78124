"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use MSGMARKUP_ prefix (e.g., MSGMARKUP_HIGHLIGHT_CODE=true).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use MSGMARKUP_ prefix.

    Examples:
        MSGMARKUP_SPOILER_ENTITY_TYPE=MessageEntitySpoiler
        MSGMARKUP_HIGHLIGHT_CODE=true
        MSGMARKUP_PYGMENTS_STYLE=monokai
    """

    model_config = SettingsConfigDict(
        env_prefix="MSGMARKUP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Serializer configuration
    spoiler_entity_type: str = Field(
        default="MessageEntitySpoiler",
        description="Value of the data-entity-type attribute on spoiler spans",
    )

    highlight_code: bool = Field(
        default=False,
        description="Highlight fenced blocks that carry a language tag with Pygments",
    )

    pygments_style: str = Field(
        default="default",
        description="Pygments style used for inline-styled highlighting",
    )

    # Diagnostics
    debug_mode: bool = Field(
        default=False,
        description="Trace parser marker decisions regardless of CLI verbosity",
    )

    # Output configuration
    output_extension: str = Field(
        default=".html",
        description="Extension of the HTML file written by the CLI",
    )

    def outputName_make(self, inputFile: str) -> str:
        """
        Derive the output filename for an input message file.

        Args:
            inputFile: Input filename, possibly with directories

        Returns:
            Filename with its suffix replaced by output_extension

        Example:
            >>> settings = AppSettings()
            >>> settings.outputName_make('chat/message.txt')
            'chat/message.html'
        """
        stem, dot, suffix = inputFile.rpartition(".")
        if not dot or "/" in suffix:
            return f"{inputFile}{self.output_extension}"
        return f"{stem}{self.output_extension}"


# Singleton instance - import this in your code
appsettings = AppSettings()
