"""Named observatory sites."""

from skytrack.models.coordinates import Geodetic

ROQUE_DE_LOS_MUCHACHOS = Geodetic(lon_deg=-17.8925, lat_deg=28.7543, height_m=2396.0)
EL_PARANAL = Geodetic(lon_deg=-70.4042, lat_deg=-24.6272, height_m=2635.0)
MAUNA_KEA = Geodetic(lon_deg=-155.472, lat_deg=19.826, height_m=4207.0)
LA_SILLA = Geodetic(lon_deg=-70.7346, lat_deg=-29.2584, height_m=2400.0)
GREENWICH = Geodetic(lon_deg=0.0, lat_deg=51.4769, height_m=46.0)

OBSERVATORIES = {
    "roque_de_los_muchachos": ROQUE_DE_LOS_MUCHACHOS,
    "el_paranal": EL_PARANAL,
    "mauna_kea": MAUNA_KEA,
    "la_silla": LA_SILLA,
    "greenwich": GREENWICH,
}


def get_observatory(name: str) -> Geodetic:
    """Look up a site by name; spaces, hyphens and case are ignored."""
    key = name.strip().lower().replace(" ", "_").replace("-", "_")
    if key not in OBSERVATORIES:
        raise ValueError(
            f"Unknown observatory: '{name}'. Available: {', '.join(sorted(OBSERVATORIES))}"
        )
    return OBSERVATORIES[key]
