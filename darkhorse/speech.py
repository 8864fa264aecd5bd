import logging

logger = logging.getLogger(__name__)

VOICE_LANG = "pt-BR"


class Speaker:
    """Collects spoken lines for the client to voice; never blocks the caller."""

    def __init__(self, lang: str = VOICE_LANG):
        self.lang = lang
        self.spoken: list[str] = []

    def speak(self, text: str) -> None:
        logger.info("speak [%s]: %s", self.lang, text)
        self.spoken.append(text)

    def drain(self) -> list[str]:
        out, self.spoken = self.spoken, []
        return out
