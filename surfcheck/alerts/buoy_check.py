"""Cross-check a buoy observation against a forecast wave range."""

from surfcheck.models.buoy import HEIGHT_MATCH_TOLERANCE_FT, BuoyComparison, BuoyReading


def compare_buoy_to_forecast(
    reading: BuoyReading, wave_min: float, wave_max: float
) -> BuoyComparison:
    """Match when the buoy height in feet lies within 1ft of the forecast range.

    The delta is measured against the middle of the range. A reading with no
    wave height never matches.
    """
    height_ft = reading.wave_height_ft
    if height_ft is None:
        return BuoyComparison(reading, wave_min, wave_max, False, None)
    delta = height_ft - (wave_min + wave_max) / 2
    match = (
        wave_min - HEIGHT_MATCH_TOLERANCE_FT
        <= height_ft
        <= wave_max + HEIGHT_MATCH_TOLERANCE_FT
    )
    return BuoyComparison(reading, wave_min, wave_max, match, delta)
