"""
Input-token budget for a single summarization call.
"""

from ..exceptions import ConfigurationError
from ..logging_config import get_logger
from ..prompts import build_messages

logger = get_logger(__name__)


def compute_input_budget(context_size: int, target_size: int, token_counter) -> int:
    """
    Tokens of source text that one summarization call can take.

    The context window has to hold the prompt (rendered with an empty body),
    the text itself, and the summary the model is asked to write.

    Raises:
        ConfigurationError: If the model context is too small for the target size
    """
    prompt_overhead = token_counter.count_messages(build_messages("", target_size))
    budget = context_size - (prompt_overhead + target_size)
    if budget <= 0:
        raise ConfigurationError(
            f"Context size {context_size} leaves no room for input text "
            f"(prompt overhead {prompt_overhead} + target summary {target_size})"
        )
    logger.debug(f"Input budget {budget} = {context_size} - ({prompt_overhead} + {target_size})")
    return budget
