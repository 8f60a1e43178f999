"""Tests for the VIP look generation service."""

from __future__ import annotations

import json

import pytest
import pytest_mock

from aura_stylist.core import database_ops
from aura_stylist.core.ai_gateway import AIGatewayClient
from aura_stylist.core.errors import InsufficientInput, MalformedResponseError, RateLimited
from aura_stylist.models import ColorAnalysis, ColorProfile
from aura_stylist.services.vip_looks_service import generate_vip_looks

MODEL_OUTPUT = "Claro! Seguem os looks:\n" + json.dumps(
    {
        "looks": [
            {
                "name": "Casual Neutro",
                "items": ["tee", "skirt"],
                "chromatic_score": 95,
                "vip_tier": "gold",
            },
            {
                "name": "Noite de Gala",
                "items": ["blazer", "skirt"],
                "chromatic_score": 70,
                "vip_tier": "bronze",
            },
        ]
    }
)


@pytest.fixture
def data_store(mocker: pytest_mock.MockerFixture, wardrobe):
    profile = ColorProfile(
        color_analysis=ColorAnalysis(season="Autumn", subtype="Warm"),
    )
    mocker.patch.object(
        database_ops, "fetch_color_profile", mocker.AsyncMock(return_value=profile)
    )
    mocker.patch.object(
        database_ops, "fetch_wardrobe_items", mocker.AsyncMock(return_value=wardrobe)
    )
    mocker.patch.object(
        database_ops,
        "insert_recommended_looks",
        mocker.AsyncMock(return_value={"id": "rec-1"}),
    )
    return database_ops


@pytest.fixture
def gateway(mocker: pytest_mock.MockerFixture):
    client = mocker.Mock(spec=AIGatewayClient)
    client.complete = mocker.AsyncMock(return_value=MODEL_OUTPUT)
    return client


@pytest.mark.asyncio
async def test_generates_ranked_looks_and_caches_them(data_store, gateway) -> None:
    result = await generate_vip_looks("user-1", count=2, gateway=gateway)

    assert [look.name for look in result.looks] == ["Noite de Gala", "Casual Neutro"]
    assert [look.chromatic_score for look in result.looks] == [100, 75]
    assert [look.vip_tier for look in result.looks] == ["gold", "silver"]
    assert result.persisted is True

    gateway.complete.assert_awaited_once()
    prompt = gateway.complete.await_args.args[0]
    assert "Crie exatamente 2 looks" in prompt
    assert "Sabrina Sato" in prompt

    data_store.insert_recommended_looks.assert_awaited_once_with(
        "user-1", "vip", result.looks
    )


@pytest.mark.asyncio
async def test_small_wardrobe_fails_before_generation(
    data_store, gateway, wardrobe
) -> None:
    data_store.fetch_wardrobe_items.return_value = wardrobe[:2]

    with pytest.raises(InsufficientInput):
        await generate_vip_looks("user-1", gateway=gateway)

    assert gateway.complete.await_count == 0
    data_store.insert_recommended_looks.assert_not_awaited()


@pytest.mark.asyncio
async def test_cache_failure_does_not_fail_request(data_store, gateway) -> None:
    data_store.insert_recommended_looks.side_effect = Exception("db down")

    result = await generate_vip_looks("user-1", gateway=gateway)

    assert len(result.looks) == 2
    assert result.persisted is False


@pytest.mark.asyncio
async def test_unparsable_output_is_malformed(data_store, gateway) -> None:
    gateway.complete.return_value = "Desculpe, não consegui gerar looks."

    with pytest.raises(MalformedResponseError):
        await generate_vip_looks("user-1", gateway=gateway)

    data_store.insert_recommended_looks.assert_not_awaited()


@pytest.mark.asyncio
async def test_gateway_errors_propagate(data_store, gateway) -> None:
    gateway.complete.side_effect = RateLimited()

    with pytest.raises(RateLimited):
        await generate_vip_looks("user-1", gateway=gateway)

    data_store.insert_recommended_looks.assert_not_awaited()


@pytest.mark.asyncio
async def test_missing_profile_still_generates(data_store, gateway) -> None:
    data_store.fetch_color_profile.return_value = None

    result = await generate_vip_looks("user-1", gateway=gateway)

    assert len(result.looks) == 2
    assert "Análise completa não disponível" in gateway.complete.await_args.args[0]
