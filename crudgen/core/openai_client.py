import os
from typing import Optional

from dotenv import load_dotenv
from openai import OpenAI

load_dotenv()

DEFAULT_MODEL = os.getenv("OPENAI_MODEL", "gpt-5")
DEFAULT_MAX_TOKENS = int(os.getenv("OPENAI_MAX_TOKENS", "8192"))


def _timeout_from_env() -> Optional[float]:
    raw = os.getenv("OPENAI_TIMEOUT", "").strip()
    return float(raw) if raw else None


class OpenAIClient:
    def __init__(self, api_key: Optional[str] = None, model: str = DEFAULT_MODEL,
                 max_tokens: int = DEFAULT_MAX_TOKENS, timeout: Optional[float] = None):
        api_key = api_key or os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise RuntimeError("OPENAI_API_KEY not found in environment or .env")
        timeout = timeout if timeout is not None else _timeout_from_env()
        kwargs = {"api_key": api_key}
        if timeout is not None:
            kwargs["timeout"] = timeout
        self.client = OpenAI(**kwargs)
        self.model = model
        self.max_tokens = max_tokens

    def ask_json(self, system: str, user: str) -> str:
        """
        Sends one chat completion constrained to a JSON object reply and
        returns the raw message text ("{}" when the model sends nothing).
        """
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            response_format={"type": "json_object"},
            max_completion_tokens=self.max_tokens,
        )
        return response.choices[0].message.content or "{}"
