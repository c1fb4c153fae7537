"""AI service for generating token commentary via HuggingFace or OpenAI."""

import json
import logging
import re
from typing import Optional

import httpx

from src.config import Config
from src.models import Insight, ModelInfo, TokenData

logger = logging.getLogger(__name__)

HUGGINGFACE_API_URL = "https://api-inference.huggingface.co/models"
OPENAI_API_URL = "https://api.openai.com/v1/chat/completions"
REQUEST_TIMEOUT = 20.0
MAX_NEW_TOKENS = 200
TEMPERATURE = 0.7
MAX_REASONING_LENGTH = 500

SYSTEM_PROMPT = (
    "You are a financial market analyst specializing in cryptocurrency token "
    "analysis. Provide concise, data-driven insights in JSON format."
)

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


class AIProviderError(Exception):
    """Raised when an AI provider cannot produce a usable insight."""


def build_prompt(token: TokenData) -> str:
    """Build the analysis prompt from token market data."""
    market = token.market_data
    return (
        'Given the following token market data, provide a JSON response with two keys: '
        '"reasoning" and "sentiment". \n\n'
        f"Token: {token.name} ({token.symbol.upper()})\n"
        f"Current Price: ${market.current_price:,}\n"
        f"Market Cap: ${market.market_cap:,}\n"
        f"24h Volume: ${market.total_volume:,}\n"
        f"24h Change: {market.price_change_percentage_24h:.2f}%\n"
        f"7d Change: {market.price_change_percentage_7d:.2f}%\n\n"
        "Analyze the market sentiment and provide:\n"
        "1. \"reasoning\": Brief explanation (2-3 sentences) of the market conditions\n"
        "2. \"sentiment\": One of \"Bullish\", \"Bearish\", or \"Neutral\"\n\n"
        "Respond ONLY with valid JSON, no additional text."
    )


def parse_ai_response(text: str) -> Optional[Insight]:
    """
    Extract an insight from raw model output.
    
    Returns:
        Insight, or None if the text holds no JSON object with
        both 'reasoning' and 'sentiment'
    """
    match = _JSON_OBJECT.search(text or "")
    if not match:
        return None
    
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError:
        return None
    
    if not isinstance(parsed, dict):
        return None
    
    reasoning = parsed.get("reasoning")
    sentiment = parsed.get("sentiment")
    if not reasoning or not sentiment:
        return None
    
    return Insight(
        reasoning=str(reasoning)[:MAX_REASONING_LENGTH],
        sentiment=str(sentiment),
    )


def fallback_insight(token: TokenData) -> Insight:
    """
    Rule-based insight used when no AI provider is available.
    
    Sentiment follows the 24h change: above +5% is Bullish,
    below -5% is Bearish, anything else Neutral.
    """
    market = token.market_data
    change_24h = market.price_change_percentage_24h or 0
    
    sentiment = "Neutral"
    if change_24h > 5:
        sentiment = "Bullish"
    elif change_24h < -5:
        sentiment = "Bearish"
    
    direction = "gain" if change_24h >= 0 else "loss"
    size = "high" if market.market_cap > 10e9 else "moderate"
    reasoning = (
        f"The token shows {abs(change_24h):.2f}% {direction} in the last 24 hours. "
        f"Market cap of ${market.market_cap / 1e9:.2f}B indicates {size} market capitalization."
    )
    return Insight(reasoning=reasoning, sentiment=sentiment)


class AIService:
    """Service for generating token insights with a configured AI provider."""

    def __init__(
        self,
        config: Config,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            config: Provider choice, API keys and model names
            transport: Optional httpx transport (used by tests)
        """
        self.provider = config.ai_provider.upper()
        self.huggingface_key = config.huggingface_api_key
        self.huggingface_model = config.huggingface_model
        self.openai_key = config.openai_api_key
        self.openai_model = config.openai_model
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def model_info(self) -> ModelInfo:
        """Report the active provider and model name."""
        if self.provider == "OPENAI":
            return ModelInfo(provider=self.provider, model=self.openai_model)
        if self.provider == "HUGGINGFACE":
            return ModelInfo(provider=self.provider, model=self.huggingface_model)
        return ModelInfo(provider=self.provider, model="fallback")

    async def generate_insight(self, token: TokenData) -> Insight:
        """
        Generate an insight for a token.
        
        Any provider failure is logged and answered with
        the rule-based fallback insight.
        """
        logger.info(f"Generating insight using {self.provider}")
        
        try:
            if self.provider == "HUGGINGFACE":
                insight = await self._generate_huggingface(token)
            elif self.provider == "OPENAI":
                insight = await self._generate_openai(token)
            else:
                raise AIProviderError(f"Unsupported AI provider: {self.provider}")
        except (
            AIProviderError,
            httpx.HTTPError,
            ValueError,
            KeyError,
            IndexError,
            TypeError,
            AttributeError,
        ) as e:
            logger.warning(f"AI provider failed, using fallback insight: {e}")
            return fallback_insight(token)
        
        if insight is None:
            logger.warning("AI response could not be parsed, using fallback insight")
            return fallback_insight(token)
        return insight

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={"Content-Type": "application/json"},
                timeout=REQUEST_TIMEOUT,
                transport=self._transport,
            )
        return self._client

    async def _generate_huggingface(self, token: TokenData) -> Optional[Insight]:
        if not self.huggingface_key:
            raise AIProviderError("HuggingFace API key not configured")
        
        client = await self._get_client()
        response = await client.post(
            f"{HUGGINGFACE_API_URL}/{self.huggingface_model}",
            json={
                "inputs": build_prompt(token),
                "parameters": {
                    "max_new_tokens": MAX_NEW_TOKENS,
                    "temperature": TEMPERATURE,
                    "return_full_text": False,
                },
            },
            headers={"Authorization": f"Bearer {self.huggingface_key}"},
        )
        response.raise_for_status()
        
        data = response.json()
        generated = data[0].get("generated_text", "") if data else ""
        return parse_ai_response(generated)

    async def _generate_openai(self, token: TokenData) -> Optional[Insight]:
        if not self.openai_key:
            raise AIProviderError("OpenAI API key not configured")
        
        client = await self._get_client()
        response = await client.post(
            OPENAI_API_URL,
            json={
                "model": self.openai_model,
                "messages": [
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_prompt(token)},
                ],
                "temperature": TEMPERATURE,
                "max_tokens": MAX_NEW_TOKENS,
                "response_format": {"type": "json_object"},
            },
            headers={"Authorization": f"Bearer {self.openai_key}"},
        )
        response.raise_for_status()
        
        content = response.json()["choices"][0]["message"]["content"]
        return parse_ai_response(content or "")

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
