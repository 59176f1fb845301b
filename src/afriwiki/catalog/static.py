"""Static reference lists: countries and demonyms, sectors, glossary terms."""

from __future__ import annotations

from afriwiki.models.entity import EntityCategory, LinkableEntity

COUNTRIES: list[tuple[str, str]] = [
    ("Bénin", "/pays/bj"),
    ("béninois", "/pays/bj"),
    ("béninoise", "/pays/bj"),
    ("Sénégal", "/pays/sn"),
    ("sénégalais", "/pays/sn"),
    ("Nigeria", "/pays/ng"),
    ("nigérian", "/pays/ng"),
    ("Côte d'Ivoire", "/pays/ci"),
    ("ivoirien", "/pays/ci"),
    ("Kenya", "/pays/ke"),
    ("kenyan", "/pays/ke"),
    ("Ghana", "/pays/gh"),
    ("ghanéen", "/pays/gh"),
    ("Rwanda", "/pays/rw"),
    ("rwandais", "/pays/rw"),
    ("Afrique du Sud", "/pays/za"),
    ("sud-africain", "/pays/za"),
    ("Maroc", "/pays/ma"),
    ("marocain", "/pays/ma"),
    ("Égypte", "/pays/eg"),
    ("égyptien", "/pays/eg"),
    ("Togo", "/pays/tg"),
    ("togolais", "/pays/tg"),
    ("Cameroun", "/pays/cm"),
    ("camerounais", "/pays/cm"),
    ("Mali", "/pays/ml"),
    ("malien", "/pays/ml"),
]

SECTORS: list[tuple[str, str]] = [
    ("fintech", "/secteur/fintech"),
    ("e-commerce", "/secteur/ecommerce"),
    ("agritech", "/secteur/agritech"),
    ("healthtech", "/secteur/healthtech"),
    ("edtech", "/secteur/edtech"),
    ("logistique", "/secteur/logistique"),
    ("énergie", "/secteur/energie"),
    ("intelligence artificielle", "/secteur/ia"),
    ("IA", "/secteur/ia"),
    ("digitalisation", "/secteur/digital"),
]

TERMS: list[tuple[str, str]] = [
    ("entrepreneur", "/glossaire/entrepreneur"),
    ("entrepreneurs", "/glossaire/entrepreneur"),
    ("startup", "/glossaire/startup"),
    ("startups", "/glossaire/startup"),
    ("levée de fonds", "/glossaire/levee-de-fonds"),
    ("incubateur", "/glossaire/incubateur"),
    ("accélérateur", "/glossaire/accelerateur"),
    ("capital-risque", "/glossaire/capital-risque"),
    ("business angel", "/glossaire/business-angel"),
    ("licorne", "/glossaire/licorne"),
    ("Afrique", "/glossaire/afrique"),
    ("africain", "/glossaire/afrique"),
    ("africaine", "/glossaire/afrique"),
    ("africains", "/glossaire/afrique"),
]


def _entities(pairs: list[tuple[str, str]], category: EntityCategory) -> list[LinkableEntity]:
    return [LinkableEntity(name=name, target_path=path, category=category) for name, path in pairs]


def static_entities() -> list[LinkableEntity]:
    """Countries, then sectors, then glossary terms, in declaration order."""
    return (
        _entities(COUNTRIES, "place")
        + _entities(SECTORS, "sector")
        + _entities(TERMS, "glossary-term")
    )
