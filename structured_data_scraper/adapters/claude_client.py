"""
Claude API Client for generative structured data fallback.
Provides an async text-generation capability: prompt in, text out.

DESIGN PRINCIPLES:
- Only describe what the page content supports
- Never invent contact details, prices, ratings or reviews
- Return a single JSON array, nothing else
"""
from typing import Optional

import anthropic

from structured_data_scraper.config import config
from structured_data_scraper.utils.logger import LayerLogger


# System prompt enforcing strict non-hallucination
SYSTEM_PROMPT = """You are a structured data expert for schema.org JSON-LD.

Your role is to describe a web page using ONLY information present in the input.

ABSOLUTE RULES:
• Never fabricate emails, phone numbers, addresses, prices, ratings or reviews
• Never include content not explicitly present in the input
• Every object MUST contain "@context" and "@type"
• Output MUST be a single JSON array and nothing else"""


class ClaudeClient:
    """
    Claude API client implementing the text-generation capability.
    
    Temperature=0 for deterministic output. Without an API key the client
    reports itself unavailable and callers use the heuristic fallback.
    """
    
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = config.CLAUDE_MODEL,
        max_tokens: int = config.GENERATION_MAX_TOKENS,
        timeout: float = config.GENERATION_TIMEOUT,
    ):
        self.logger = LayerLogger("claude_client")
        self.model = model
        self.max_tokens = max_tokens
        api_key = api_key or config.CLAUDE_API_KEY
        
        if not api_key:
            self.logger.log_error("CLAUDE_API_KEY not found in environment", error_type="config")
            self.client = None
        else:
            self.client = anthropic.AsyncAnthropic(api_key=api_key, timeout=timeout, max_retries=0)
            self.logger.log_action("init", "completed", model=self.model)
    
    def is_available(self) -> bool:
        """Check if Claude client is properly configured."""
        return self.client is not None
    
    async def generate(self, prompt: str) -> str:
        """
        Send a prompt and return the text of the response.
        
        Raises:
            RuntimeError: if the client is not configured
            anthropic.APIError: on API failures
        """
        if not self.client:
            raise RuntimeError("Claude client is not configured")
        
        self.logger.log_action("generate", "started", model=self.model, prompt_length=len(prompt))
        
        response = await self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=0,
            system=SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}]
        )
        
        text = "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )
        
        self.logger.log_action(
            "generate",
            "completed",
            response_length=len(text),
            tokens=response.usage.input_tokens + response.usage.output_tokens
        )
        return text
