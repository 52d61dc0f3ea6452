"""
Fixed summarization prompt and the ``[[[ ]]]`` summary-marker convention.

Intermediate summaries that get folded back into a larger document are
wrapped in triple square brackets so the model can weigh them as stand-ins
for the whole passage they condense. The markers are plain text the model
must see in-band.
"""

SUMMARY_OPEN = "[[["
SUMMARY_CLOSE = "]]]"

SYSTEM_PROMPT = """
The user is requesting a book summary. Due to the extensive length of the book, you're required to summarize it 
one chunk at a time. If a chunk includes a section encapsulated by three square brackets, such as 
    [[[ some text ]]]
, it signifies a GPT-generated summary of a larger chunk. Assign greater importance to these encapsulated summaries, 
as they represent entire passages that they condense.

While drafting your summary, avoid mentioning the 'chunks' or 'passages' that serve as divisions for the summarization process. 
Aim to make your summary as comprehensive as possible, ensuring it remains within a limit of {target_size} tokens.
"""

USER_PROMPT = "Summarize the following: {text}"


def build_messages(text: str, target_size: int) -> list[dict[str, str]]:
    """Build the system + user message pair for summarizing ``text``."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT.format(target_size=target_size).strip()},
        {"role": "user", "content": USER_PROMPT.format(text=text)},
    ]


def wrap_summary(text: str) -> str:
    return f"{SUMMARY_OPEN}{text}{SUMMARY_CLOSE}"


def strip_summary_markers(text: str) -> str:
    """Remove every summary marker, leaving the enclosed text in place."""
    return text.replace(SUMMARY_OPEN, "").replace(SUMMARY_CLOSE, "")
