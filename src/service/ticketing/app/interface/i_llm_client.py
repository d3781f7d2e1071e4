from abc import ABC, abstractmethod


class ILlmClient(ABC):
    """Text-in / text-out access to a hosted language model"""

    @abstractmethod
    async def generate(self, *, prompt: str) -> str:
        """
        Raises:
            ExternalServiceError: the model could not be reached or returned no text
        """
        pass
