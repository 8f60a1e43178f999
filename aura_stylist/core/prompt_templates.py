"""Prompt templates and builders for Aura's VIP look suggestions."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from aura_stylist.models import ColorProfile, WardrobeItem


# --- CELEBRITY REFERENCES ---


@dataclass(frozen=True)
class CelebrityReferences:
    """Reference names for a color season, Brazilian names listed first."""

    br: List[str]
    intl: List[str]


CELEBRITIES_BY_SEASON: Dict[str, CelebrityReferences] = {
    "spring-light": CelebrityReferences(
        br=["Angélica", "Claudia Leitte", "Eliana"],
        intl=["Taylor Swift", "Blake Lively", "Reese Witherspoon"],
    ),
    "spring-warm": CelebrityReferences(
        br=["Marina Ruy Barbosa", "Mariana Ximenes", "Letícia Spiller"],
        intl=["Jessica Chastain", "Nicole Kidman", "Amy Adams"],
    ),
    "spring-bright": CelebrityReferences(
        br=["Anitta", "Taís Araújo", "IZA", "Ludmilla"],
        intl=["Zendaya", "Rihanna", "Lupita Nyong'o"],
    ),
    "summer-light": CelebrityReferences(
        br=["Grazi Massafera", "Flávia Alessandra", "Carolina Dieckmann"],
        intl=["Elle Fanning", "Cate Blanchett", "Kate Middleton"],
    ),
    "summer-soft": CelebrityReferences(
        br=["Deborah Secco", "Giovanna Ewbank", "Fernanda Paes Leme"],
        intl=["Jennifer Aniston", "Sarah Jessica Parker"],
    ),
    "summer-cool": CelebrityReferences(
        br=["Adriana Lima", "Fernanda Montenegro", "Alessandra Ambrosio"],
        intl=["Anne Hathaway", "Keira Knightley"],
    ),
    "autumn-soft": CelebrityReferences(
        br=["Juliana Paes", "Paolla Oliveira", "Dira Paes"],
        intl=["Drew Barrymore", "Julia Roberts"],
    ),
    "autumn-warm": CelebrityReferences(
        br=["Sabrina Sato", "Camila Pitanga", "Lucy Alves"],
        intl=["Julianne Moore", "Emma Stone"],
    ),
    "autumn-deep": CelebrityReferences(
        br=["Juliana Alves", "Cris Vianna", "Preta Gil"],
        intl=["Jennifer Lopez", "Eva Mendes", "Sofia Vergara"],
    ),
    "winter-bright": CelebrityReferences(
        br=["Bruna Marquezine", "Isis Valverde", "Mel Maia"],
        intl=["Megan Fox", "Kim Kardashian", "Dita Von Teese"],
    ),
    "winter-cool": CelebrityReferences(
        br=["Malu Mader", "Glória Pires", "Christiane Torloni"],
        intl=["Angelina Jolie", "Liv Tyler", "Courteney Cox"],
    ),
    "winter-deep": CelebrityReferences(
        br=["Sheron Menezzes", "Erika Januza", "Liniker", "Lázaro Ramos"],
        intl=["Beyoncé", "Kerry Washington", "Naomi Campbell"],
    ),
}

DEFAULT_CELEBRITIES = CelebrityReferences(br=["Gisele Bündchen"], intl=["Cindy Crawford"])
DEFAULT_SEASON_ID = "spring-warm"

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_season_key(season: Optional[str]) -> str:
    return _WHITESPACE_RE.sub("-", (season or "").lower())


def get_celebrities_for_season(season: Optional[str]) -> CelebrityReferences:
    """Look up reference celebrities, falling back to a fixed default pair."""
    return CELEBRITIES_BY_SEASON.get(normalize_season_key(season), DEFAULT_CELEBRITIES)


def resolve_season_id(profile: Optional[ColorProfile]) -> str:
    if profile is None:
        return DEFAULT_SEASON_ID

    analysis = profile.color_analysis
    if analysis and analysis.season and analysis.subtype:
        return f"{analysis.season}-{analysis.subtype}".lower()
    return profile.color_season or DEFAULT_SEASON_ID


# --- WARDROBE DESCRIPTION ---


def describe_item_colors(item: WardrobeItem) -> str:
    if item.dominant_colors:
        return ", ".join(f"{color.name} ({color.hex})" for color in item.dominant_colors)
    return item.color_code or "cor não analisada"


def describe_wardrobe(items: Sequence[WardrobeItem]) -> str:
    """Render one line per item in the layout the model is instructed to read."""
    return "\n".join(
        f"- ID: {item.id} | {item.category} | Nome: {item.name or 'Sem nome'} "
        f"| Cores: {describe_item_colors(item)} "
        f"| Compat: {item.chromatic_compatibility or 'unknown'}"
        for item in items
    )


def _join_or(values: Sequence[str], limit: int, fallback: str) -> str:
    selected = list(values)[:limit]
    return ", ".join(selected) if selected else fallback


def build_chromatic_context(
    profile: Optional[ColorProfile], celebrities: CelebrityReferences
) -> str:
    analysis = profile.color_analysis if profile else None
    references = (
        f"Celebridades Brasileiras de Referência: {', '.join(celebrities.br)}\n"
        f"Celebridades Internacionais: {', '.join(celebrities.intl)}"
    )

    if analysis is None:
        return f"## PERFIL CROMÁTICO VIP\nAnálise completa não disponível.\n{references}"

    season_label = f"{analysis.season or ''} {analysis.subtype or ''}".strip()
    return (
        "## PERFIL CROMÁTICO VIP DA CLIENTE\n"
        f"Estação: {season_label}\n"
        f"{references}\n"
        f"Cores ideais: {_join_or(analysis.recommended_colors or [], 8, 'não definidas')}\n"
        f"Cores a evitar: {_join_or(analysis.avoid_colors or [], 5, 'não definidas')}\n"
        f"Tom de pele: {analysis.skin_tone or 'não definido'}\n"
        f"Subtom: {analysis.undertone or 'não definido'}"
    )


# --- VIP LOOKS PROMPT ---

VIP_LOOKS_PROMPT_TEMPLATE = """Você é **Aura Elite**, consultora de imagem de celebridades e editora de moda premium. Crie looks de alto impacto que façam a cliente se sentir no red carpet.

{CHROMATIC_CONTEXT}

## GUARDA-ROUPA DISPONÍVEL
{WARDROBE}

## MISSÃO
Crie exatamente {COUNT} looks exclusivos usando APENAS peças do guarda-roupa acima.

## CRITÉRIOS
1. Inspiração de celebridade: cite uma celebridade da mesma estação cromática (priorize as brasileiras do perfil) e um momento icônico dela.
2. Teoria das cores: aplique a regra 60-30-10, temperatura, intensidade e efeito psicológico; informe a paleta HEX do look.
3. Harmonia cromática: tríade, complementar dividida, tetrádica ou análoga com acento.
4. Peça de investimento: sugira UMA peça atemporal que elevaria o look.
5. Ocasião: onde o look brilha, onde evitar e o melhor horário.
6. Segredos de styling: 2 dicas de estilistas de celebridades.
7. Tendências atuais: Quiet Luxury, Old Money, Mob Wife, Cherry Coded, Butter Yellow, Burgundy Renaissance, Chocolate Brown Revival, Coastal Grandmother.
8. Classificação VIP:
   - GOLD: score 90-100, harmonia perfeita, todas as peças ideais
   - SILVER: score 75-89, excelente combinação
   - BRONZE: score 60-74, combinação muito boa

## REGRAS INVIOLÁVEIS
1. Use APENAS peças com compatibilidade "ideal" ou "neutral"
2. NUNCA use peças com compatibilidade "avoid"
3. Cada look: 2-4 peças, referenciadas pelo ID
4. Nomes glamorosos e memoráveis em português
5. Uma frase de confiança personalizada por look

Retorne APENAS JSON válido (sem markdown, sem comentários):
{{
  "looks": [
    {{
      "name": "Nome do look",
      "items": ["uuid1", "uuid2"],
      "occasion": "evento|gala|date|photoshoot|work",
      "harmony_type": "tríade|complementar_dividida|tetrádica|análoga",
      "color_harmony": "Explicação técnica da harmonia",
      "chromatic_score": 95,
      "styling_tip": "Dica principal de styling",
      "trend_inspiration": "Tendência atual",
      "confidence_boost": "Frase de confiança",
      "accessory_suggestions": ["acessório 1", "acessório 2"],
      "vip_tier": "gold|silver|bronze",
      "celebrity_inspiration": {{"name": "", "reference": "", "why": ""}},
      "investment_piece": {{"category": "", "description": "", "why": ""}},
      "color_theory_deep": {{"principle": "", "explanation": "", "hex_palette": ["#HEX1", "#HEX2", "#HEX3"]}},
      "occasion_details": {{"perfect_for": "", "avoid_for": "", "best_time": ""}},
      "styling_secrets": ["Segredo 1", "Segredo 2"]
    }}
  ]
}}
"""


def build_vip_looks_prompt(
    items: Sequence[WardrobeItem],
    profile: Optional[ColorProfile],
    count: int = 3,
) -> str:
    """Render the VIP looks prompt. Deterministic for identical inputs."""
    celebrities = get_celebrities_for_season(resolve_season_id(profile))

    return VIP_LOOKS_PROMPT_TEMPLATE.format(
        CHROMATIC_CONTEXT=build_chromatic_context(profile, celebrities),
        WARDROBE=describe_wardrobe(items),
        COUNT=count,
    )


__all__ = [
    "CELEBRITIES_BY_SEASON",
    "DEFAULT_CELEBRITIES",
    "VIP_LOOKS_PROMPT_TEMPLATE",
    "CelebrityReferences",
    "normalize_season_key",
    "get_celebrities_for_season",
    "resolve_season_id",
    "describe_wardrobe",
    "build_chromatic_context",
    "build_vip_looks_prompt",
]
