"""
Configuration settings for the agents package.
"""

import os

from dotenv import load_dotenv

load_dotenv()

################################
# Model Configuration
################################

#==============================================================================
# TEXT GENERATION MODELS
#==============================================================================

DECK_GENERATION_MODEL = os.getenv("DECK_GENERATION_MODEL", "claude-sonnet-4-5")

# Aliases -> (provider, provider model id)
MODELS = {
    "claude-sonnet-4-5": ("anthropic", "claude-sonnet-4-5-20250929"),
    "claude-sonnet-4": ("anthropic", "claude-sonnet-4-20250514"),
    "claude-3-7-sonnet": ("anthropic", "claude-3-7-sonnet-20250219"),
    "claude-3-5-haiku": ("anthropic", "claude-3-5-haiku-20241022"),
}

PHASE1_MAX_TOKENS = 4096
PHASE2_MAX_TOKENS = 8192
SINGLE_PHASE_MAX_TOKENS = 4096

# Request timeout for a single text-generation call (seconds)
TEXT_GENERATION_TIMEOUT_SECONDS = float(os.getenv("TEXT_GENERATION_TIMEOUT_SECONDS", "300"))

#==============================================================================
# DECK GENERATION MODE
#==============================================================================

# Used by the deck endpoint when the request does not say which path to take
MULTI_PHASE_DEFAULT = os.getenv("MULTI_PHASE_DEFAULT", "false").lower() == "true"

#==============================================================================
# IMAGE GENERATION PROVIDER SWITCH
#==============================================================================

# Select which provider handles slide images: "leonardo" or "dalle"
IMAGE_PROVIDER = os.getenv("IMAGE_PROVIDER", "leonardo")

LEONARDO_API_URL = "https://cloud.leonardo.ai/api/rest/v1"
LEONARDO_MODEL_ID = "b24e16ff-06e3-43eb-8d33-4416c2d75876"  # Leonardo Phoenix
LEONARDO_IMAGE_WIDTH = 1024
LEONARDO_IMAGE_HEIGHT = 768
LEONARDO_GUIDANCE_SCALE = 7
LEONARDO_INFERENCE_STEPS = 30

# 30 polls * 2s = 60s ceiling per prompt
IMAGE_POLL_INTERVAL_SECONDS = 2.0
IMAGE_POLL_MAX_ATTEMPTS = 30
IMAGE_INTER_REQUEST_DELAY_SECONDS = 1.0

DALLE_API_URL = "https://api.openai.com/v1/images/generations"
DALLE_MODEL = "dall-e-3"
DALLE_QUALITY = "hd"
DALLE_SIZE = "1792x1024"  # Wide format for slides
DALLE_STYLE = "vivid"

#==============================================================================
# ICON GENERATION
#==============================================================================

ICONKIT_API_URL = "https://api.iconkit.ai/v1"
ICONKIT_DEFAULT_STYLE = "minimalist"
ICONKIT_DEFAULT_COLOR = "auto"
ICONKIT_DEFAULT_FORMAT = "png"

#==============================================================================
# REFERENCE MATERIAL & BRAND EXTRACTION
#==============================================================================

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
REFERENCE_URL_CHAR_BUDGET = 5000
REFERENCE_FILE_CHAR_BUDGET = 10000
REFERENCE_FETCH_TIMEOUT_SECONDS = float(os.getenv("REFERENCE_FETCH_TIMEOUT_SECONDS", "15"))

BRAND_FETCH_TIMEOUT_SECONDS = 10.0
BRAND_MAX_COLORS = 3
BRAND_MAX_IMAGES = 10

DEFAULT_BRAND_COLORS = {
    "primary": "#2563eb",
    "secondary": "#7c3aed",
    "accent": "#f59e0b",
    "background": "#ffffff",
    "text": "#1f2937",
}
DEFAULT_FONT_FAMILY = "Inter, system-ui, sans-serif"
