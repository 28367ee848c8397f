from promptvault.models.prompt import Prompt
from promptvault.models.tag import Tag
from promptvault.models.version import PromptVersion

__all__ = ["Prompt", "PromptVersion", "Tag"]
