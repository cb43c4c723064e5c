# File: tests/test_generator.py
import pytest

from keyword_scout.generator import SYSTEM_PROMPT, ArticleGenerator, build_messages


@pytest.mark.asyncio()
async def test_generate_returns_first_choice(basic_config, fake_client, sleep_recorder):
    generator = ArticleGenerator(fake_client, basic_config, sleep=sleep_recorder)
    text = await generator.generate("Plumbing Repair NJ")

    assert text == "Generated article"
    assert sleep_recorder.delays == [basic_config.rate_limit_delay]
    call = fake_client.calls[0]
    assert call["model"] == "gpt-3.5-turbo"
    assert call["temperature"] == 0.7
    assert call["max_tokens"] == 800
    assert call["messages"] == build_messages("Plumbing Repair NJ")


def test_messages_frame_local_services_writer():
    system, user = build_messages("Roof Repair CA")
    assert system == {"role": "system", "content": SYSTEM_PROMPT}
    assert user["role"] == "user"
    assert "Roof Repair CA" in user["content"]
    assert "500 word SEO-optimized article" in user["content"]
    assert "call to action" in user["content"]


@pytest.mark.asyncio()
async def test_always_failing_service_exhausts_attempts(basic_config, make_client, sleep_recorder):
    client = make_client(failures=100)
    generator = ArticleGenerator(client, basic_config, sleep=sleep_recorder)

    with pytest.raises(RuntimeError, match="service unavailable"):
        await generator.generate("Plumbing Repair NJ")

    assert len(client.calls) == basic_config.max_retries == 3
    d = basic_config.rate_limit_delay
    # pre-attempt pause, then linear backoff between attempts
    assert sleep_recorder.delays == [d, d * 1, d, d * 2, d]
    gaps = [d + d * 1, d + d * 2]
    assert gaps[0] < gaps[1]


@pytest.mark.asyncio()
async def test_recovers_after_transient_failure(basic_config, make_client, sleep_recorder):
    client = make_client(text="Second time lucky", failures=1)
    generator = ArticleGenerator(client, basic_config, sleep=sleep_recorder)

    assert await generator.generate("Drain Cleaning NY") == "Second time lucky"
    assert len(client.calls) == 2


@pytest.mark.asyncio()
async def test_zero_retries_still_makes_one_attempt(basic_config, make_client, sleep_recorder):
    config = basic_config.model_copy(update={"max_retries": 0})
    client = make_client(failures=5)
    generator = ArticleGenerator(client, config, sleep=sleep_recorder)

    with pytest.raises(RuntimeError):
        await generator.generate("Plumbing Repair NJ")
    assert len(client.calls) == 1
