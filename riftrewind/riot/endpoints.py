# riot/endpoints.py – table des endpoints Riot utilisés par le client

from dataclasses import dataclass
from string import Formatter
from typing import Dict, Mapping, Tuple
from urllib.parse import quote

DEFAULT_BASE_URL = "https://{region}.api.riotgames.com"

# Plateformes acceptées pour la recherche
REGIONS: Tuple[str, ...] = (
    "na1", "euw1", "eun1", "kr", "jp1",
    "br1", "la1", "la2", "oc1", "tr1", "ru",
)


@dataclass(frozen=True)
class Endpoint:
    name: str
    path: str

    @property
    def placeholders(self) -> Tuple[str, ...]:
        return placeholders(self.path)


ENDPOINTS: Dict[str, Endpoint] = {
    "summoner": Endpoint("summoner", "/lol/summoner/v4/summoners/by-name/{summonerName}"),
    "league":   Endpoint("league", "/lol/league/v4/entries/by-summoner/{summonerId}"),
    "mastery":  Endpoint("mastery", "/lol/champion-mastery/v4/champion-masteries/by-summoner/{summonerId}"),
    "status":   Endpoint("status", "/lol/status/v4/platform-data"),
}


def placeholders(template: str) -> Tuple[str, ...]:
    return tuple(field for _, field, _, _ in Formatter().parse(template) if field)


def resolve_template(template: str, params: Mapping[str, str]) -> str:
    """
    Substitute `{name}` placeholders with URL-quoted values.

    Raises:
        ValueError: a placeholder has no value, or a value matches no placeholder
    """
    expected = set(placeholders(template))
    given = set(params)
    if expected != given:
        missing = sorted(expected - given)
        unknown = sorted(given - expected)
        raise ValueError(
            f"Template {template!r}: missing={missing} unexpected={unknown}"
        )
    return template.format(**{k: quote(str(v), safe="") for k, v in params.items()})


def build_url(base_url: str, endpoint: Endpoint, region: str, params: Mapping[str, str]) -> str:
    return resolve_template(base_url, {"region": region}) + resolve_template(endpoint.path, params)
