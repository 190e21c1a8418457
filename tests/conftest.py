from __future__ import annotations

import pytest

from agents.domain.models import GenerationCredentials


@pytest.fixture
def all_credentials() -> GenerationCredentials:
    return GenerationCredentials(
        anthropic_api_key="sk-ant-test",
        leonardo_api_key="leo-test",
        iconkit_api_key="icon-test",
        openai_api_key="sk-openai-test",
    )
