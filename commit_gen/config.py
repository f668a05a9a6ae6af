MAX_DIFF_CHARS = 100000
CHUNK_MAX_TOKENS = 3000
FALLBACK_MESSAGE = "Fix bug"

DEFAULT_ENCODING = "cl100k_base"
DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"

DEFAULT_CHUNK_MODEL = "meta-llama/llama-4-scout-17b-16e-instruct"
DEFAULT_FUSION_MODEL = "qwen/qwen3-32b"

# Terse, near-deterministic phrasing for the per-chunk step.
CHUNK_SUMMARY_PARAMS = {"temperature": 0.3, "max_tokens": 32, "top_p": 1}
# Provider defaults for fusion.
FUSION_PARAMS: dict = {}

API_KEY_ENV_VAR = "GROQ_API_KEY"
BASE_URL_ENV_VAR = "GROQ_BASE_URL"
CHUNK_MODEL_ENV_VAR = "COMMIT_GEN_CHUNK_MODEL"
FUSION_MODEL_ENV_VAR = "COMMIT_GEN_FUSION_MODEL"
ENCODING_ENV_VAR = "COMMIT_GEN_ENCODING"

PAYLOAD_TOO_LARGE_MESSAGE = "Diff too large. Try a smaller change."
PROVIDER_FAILURE_MESSAGE = "AI is tired. Try again in 10 sec."

CHUNK_SUMMARY_PROMPT = """
You are a senior software engineer. Summarize this git diff chunk in 1 short phrase (max 10 words).
Focus on WHAT changed, not HOW.

DIFF CHUNK:
{chunk}
"""

FUSION_PROMPT = """
You are a senior software engineer. Combine these change summaries into ONE concise, professional git commit message.
Rules:
- Max 50 characters
- Imperative mood ("Add feature", not "Added feature")
- No fluff, no emojis, no <thinking> tags

CHANGE SUMMARIES:
{summaries}

FINAL COMMIT MESSAGE:
"""
