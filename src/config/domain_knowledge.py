"""Static team rosters for the options catalog.

# ─── PURPOSE ───────────────────────────────────────────────────────────
#
# The provider has no clean "list every team in a league" query, so the
# catalog offers teams from these hand-maintained rosters.  Each team
# becomes an option with id ``team:<LEAGUE>:<Name>``; the league part is
# later passed to the resolver as a scoring hint.
#
# All helpers are pure (no I/O).
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

TEAMS_BY_LEAGUE: dict[str, tuple[str, ...]] = {
    "NHL": (
        "Anaheim Ducks", "Arizona Coyotes", "Boston Bruins", "Buffalo Sabres",
        "Calgary Flames", "Carolina Hurricanes", "Chicago Blackhawks",
        "Colorado Avalanche", "Columbus Blue Jackets", "Dallas Stars",
        "Detroit Red Wings", "Edmonton Oilers", "Florida Panthers",
        "Los Angeles Kings", "Minnesota Wild", "Montreal Canadiens",
        "Nashville Predators", "New Jersey Devils", "New York Islanders",
        "New York Rangers", "Ottawa Senators", "Philadelphia Flyers",
        "Pittsburgh Penguins", "San Jose Sharks", "Seattle Kraken",
        "St. Louis Blues", "Tampa Bay Lightning", "Toronto Maple Leafs",
        "Vancouver Canucks", "Vegas Golden Knights", "Washington Capitals",
        "Winnipeg Jets",
    ),
    "NBA": (
        "Atlanta Hawks", "Boston Celtics", "Brooklyn Nets", "Charlotte Hornets",
        "Chicago Bulls", "Cleveland Cavaliers", "Dallas Mavericks",
        "Denver Nuggets", "Detroit Pistons", "Golden State Warriors",
        "Houston Rockets", "Indiana Pacers", "LA Clippers", "Los Angeles Lakers",
        "Memphis Grizzlies", "Miami Heat", "Milwaukee Bucks",
        "Minnesota Timberwolves", "New Orleans Pelicans", "New York Knicks",
        "Oklahoma City Thunder", "Orlando Magic", "Philadelphia 76ers",
        "Phoenix Suns", "Portland Trail Blazers", "Sacramento Kings",
        "San Antonio Spurs", "Toronto Raptors", "Utah Jazz", "Washington Wizards",
    ),
    "MLB": (
        "Arizona Diamondbacks", "Atlanta Braves", "Baltimore Orioles",
        "Boston Red Sox", "Chicago Cubs", "Chicago White Sox", "Cincinnati Reds",
        "Cleveland Guardians", "Colorado Rockies", "Detroit Tigers",
        "Houston Astros", "Kansas City Royals", "Los Angeles Angels",
        "Los Angeles Dodgers", "Miami Marlins", "Milwaukee Brewers",
        "Minnesota Twins", "New York Mets", "New York Yankees",
        "Oakland Athletics", "Philadelphia Phillies", "Pittsburgh Pirates",
        "San Diego Padres", "San Francisco Giants", "Seattle Mariners",
        "St. Louis Cardinals", "Tampa Bay Rays", "Texas Rangers",
        "Toronto Blue Jays", "Washington Nationals",
    ),
    "NFL": (
        "Arizona Cardinals", "Atlanta Falcons", "Baltimore Ravens", "Buffalo Bills",
        "Carolina Panthers", "Chicago Bears", "Cincinnati Bengals",
        "Cleveland Browns", "Dallas Cowboys", "Denver Broncos", "Detroit Lions",
        "Green Bay Packers", "Houston Texans", "Indianapolis Colts",
        "Jacksonville Jaguars", "Kansas City Chiefs", "Las Vegas Raiders",
        "Los Angeles Chargers", "Los Angeles Rams", "Miami Dolphins",
        "Minnesota Vikings", "New England Patriots", "New Orleans Saints",
        "New York Giants", "New York Jets", "Philadelphia Eagles",
        "Pittsburgh Steelers", "San Francisco 49ers", "Seattle Seahawks",
        "Tampa Bay Buccaneers", "Tennessee Titans", "Washington Commanders",
    ),
    "MLS": (
        "Atlanta United", "Austin FC", "CF Montréal", "Charlotte FC",
        "Chicago Fire FC", "Colorado Rapids", "Columbus Crew", "D.C. United",
        "FC Cincinnati", "FC Dallas", "Houston Dynamo FC", "Inter Miami CF",
        "LA Galaxy", "Los Angeles Football Club", "Minnesota United FC",
        "Nashville SC", "New England Revolution", "New York City FC",
        "New York Red Bulls", "Orlando City SC", "Philadelphia Union",
        "Portland Timbers", "Real Salt Lake", "San Diego FC",
        "San Jose Earthquakes", "Seattle Sounders FC", "Sporting Kansas City",
        "St. Louis CITY SC", "Toronto FC", "Vancouver Whitecaps FC",
    ),
    "CFL": (
        "BC Lions", "Calgary Stampeders", "Edmonton Elks",
        "Saskatchewan Roughriders", "Winnipeg Blue Bombers",
        "Hamilton Tiger-Cats", "Toronto Argonauts", "Ottawa Redblacks",
        "Montreal Alouettes",
    ),
}

# Built once at import; keys are lowercase team names.
_LEAGUE_BY_TEAM: dict[str, str] = {
    team.lower(): league
    for league, teams in TEAMS_BY_LEAGUE.items()
    for team in teams
}


def leagues() -> list[str]:
    """League codes in catalog order."""
    return list(TEAMS_BY_LEAGUE)


def league_for_team(name: str) -> str | None:
    """League code for a rostered team name (case-insensitive), else None."""
    return _LEAGUE_BY_TEAM.get(name.strip().lower())
