"""
SQL for the dashboard endpoint.

All statements are parameterless reads. Registrations qualify when state and
brand are non-blank after trimming, date_reg is set and fuel is one of
FUEL_TYPES; the chart and the brand/state filters share that predicate, the
year filter keeps only its date and fuel conditions.
"""

from utils.schemas import FUEL_TYPES

_FUEL_LIST = ", ".join(f"'{fuel}'" for fuel in FUEL_TYPES)

FUEL_CONDITION = f"fuel IN ({_FUEL_LIST})"

DATE_CONDITIONS = f"date_reg IS NOT NULL AND {FUEL_CONDITION}"

QUALIFYING_CONDITIONS = f"""
        state IS NOT NULL AND TRIM(state) <> '' AND
        brand IS NOT NULL AND TRIM(brand) <> '' AND
        {DATE_CONDITIONS}"""

CHART_QUERY = f"""
    SELECT
        UPPER(TRIM(state)) AS state,
        UPPER(TRIM(brand)) AS brand,
        TO_CHAR(date_reg, 'YYYY-MM') AS month,
        COUNT(*) AS registrations
    FROM
        ev_registrations
    WHERE{QUALIFYING_CONDITIONS}
    GROUP BY
        UPPER(TRIM(state)),
        UPPER(TRIM(brand)),
        TO_CHAR(date_reg, 'YYYY-MM')
    ORDER BY
        month, state, brand
"""

BRAND_QUERY = f"""
    SELECT DISTINCT UPPER(TRIM(brand)) AS brand
    FROM ev_registrations
    WHERE{QUALIFYING_CONDITIONS}
    ORDER BY brand
"""

STATE_QUERY = f"""
    SELECT DISTINCT UPPER(TRIM(state)) AS state
    FROM ev_registrations
    WHERE{QUALIFYING_CONDITIONS}
    ORDER BY state
"""

YEAR_QUERY = f"""
    SELECT DISTINCT EXTRACT(YEAR FROM date_reg)::int::text AS year
    FROM ev_registrations
    WHERE {DATE_CONDITIONS}
    ORDER BY year
"""

STATION_QUERY = "SELECT name, latitude, longitude, state FROM charging_stations"
