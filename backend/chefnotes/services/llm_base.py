"""
ChefNotes Backend — Abstract LLM Service Interface
====================================================

What:  Abstract base class for the external text-generation capability.
Why:   The synthesizer only needs "system instruction + prompt in, text out".
       Hiding the provider behind this contract lets tests use a fixed-response
       stub and keeps Gemini-specific code in one module.
How:   Concrete implementations inherit from LLMService and implement generate().
Who:   Called by RecipeSynthesizer during convert-to-recipe.
"""

from abc import ABC, abstractmethod


class LLMService(ABC):
    """
    Abstract interface for a generative text provider.

    Contract:
        - generate() makes exactly one provider call; no retries, no caching
        - provider failures are raised as LLMServiceError
        - a call that succeeds without any text returns an empty string
    """

    @abstractmethod
    async def generate(self, system_instruction: str, prompt: str) -> str:
        """
        Run one generation request.

        Args:
            system_instruction: Fixed role/behaviour text for the model.
            prompt: The single user content turn.

        Returns:
            The generated text verbatim, or "" when the provider returned none.

        Raises:
            LLMServiceError: Network failure, API error or SDK error.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the provider is reachable without spending generation quota.

        Returns: True if reachable, False otherwise. Never raises.
        """
        ...
