"""
demo.py
=======
Demonstration of the Varsha Engine.
Run: python -m varsha_engine.demo

Computes the annual chart for a sample birth and prints a formatted report.
"""

import logging
from datetime import date

from varsha_engine import get_varshphal


def print_section(title: str):
    print(f"\n{'─'*60}")
    print(f"  {title}")
    print(f"{'─'*60}")


def format_planet_table(planets: dict) -> str:
    lines = [f"{'Planet':<12} {'Sign':<14} {'Degree':<12} {'Nakshatra':<22} {'Pada':<5} {'House':<6}"]
    lines.append("─" * 75)
    for name, p in planets.items():
        retro = " ℞" if p.get("is_retrograde") else "  "
        lines.append(
            f"{name:<12} {p['sign']:<14} {p['degree_formatted']:<12} "
            f"{p['nakshatra']:<22} {p['nakshatra_pada']:<5} H{p['house']}"
            f"{retro}"
        )
    return "\n".join(lines)


def run_demo():
    logging.basicConfig(level=logging.INFO)
    print("=" * 60)
    print("   VARSHA ENGINE — SAMPLE ANNUAL CHART")
    print("=" * 60)

    # ── Sample birth data ──
    params = {
        "year": 1990, "month": 6, "day": 15,
        "hour": 10, "minute": 30, "second": 0,
        "timezone_offset": 5.5,        # IST
        "latitude": 28.6139,           # Delhi
        "longitude": 77.2090,
        "target_year": 2025,
        "ayanamsa": "lahiri",
    }

    print(f"\n  Birth Date  : {params['year']}-{params['month']:02d}-{params['day']:02d}")
    print(f"  Birth Time  : {params['hour']:02d}:{params['minute']:02d} IST (UTC+5:30)")
    print(f"  Location    : Delhi, India ({params['latitude']}°N, {params['longitude']}°E)")
    print(f"  Target Year : {params['target_year']}")

    report = get_varshphal(**params, today=date(params["target_year"], 9, 1))
    natal = report["natal_summary"]
    v = report["varshphal"]

    print_section("NATAL SUMMARY")
    print(f"  Lagna       : {natal['lagna']}")
    print(f"  Moon        : {natal['moon_sign']} ({natal['moon_nakshatra']})")

    print_section("SOLAR RETURN")
    meta = v["meta"]
    print(f"  UTC         : {meta['solar_return_utc']}")
    print(f"  Local       : {meta['solar_return_local']}")
    print(f"  Julian Day  : {meta['solar_return_jd']}")
    print(f"  Chart       : {'Day' if meta['is_day_chart'] else 'Night'}")
    lagna = v["varsha_lagna"]
    print(f"  Varsha Lagna: {lagna['sign']} {lagna['degree_formatted']}")

    print_section("ANNUAL CHART — PLANET POSITIONS")
    print(format_planet_table(v["annual_planets"]))

    print_section("MUNTHA & VARSHESH")
    m = v["muntha"]
    print(f"  Muntha      : {m['sign']} (H{m['annual_house']}, lord {m['lord']})")
    y = v["varshesh"]
    print(f"  Varshesh    : {y['planet']} ({y['role']} lord, score {y['score']})")
    for c in y["candidates"]:
        print(f"    {c['role']:<10} {c['planet']:<10} {c['score']:>4}")

    print_section("TAJIKA ASPECTS")
    for a in v["tajika_aspects"]:
        state = "applying" if a["applying"] else "separating"
        print(f"  {a['planets'][0]:<8} {a['aspect']:<12} {a['planets'][1]:<8} "
              f"orb {a['orb']:>6.2f}° / {a['max_orb']:.0f}°  {state:<10} {a['grade']}")

    print_section("SAHAMS")
    for name, s in v["sahams"].items():
        print(f"  {name:<12} {s['sign']:<14} {s['degree']:>6.2f}°  H{s['house']}")

    print_section("PANCHA-VARGIYA BALA")
    print(f"  {'Planet':<10} {'Uchcha':>6} {'Hadda':>6} {'Drek':>6} {'Nav':>6} {'D12':>6} {'Total':>7}")
    for planet, b in v["pancha_vargiya_bala"].items():
        print(f"  {planet:<10} {b['uchcha']:>6.2f} {b['hadda']:>6.1f} {b['drekkana']:>6.1f} "
              f"{b['navamsha']:>6.1f} {b['dwadashamsha']:>6.1f} {b['total']:>7.2f}  {b['category']}")

    print_section("TRI-PATAKI CHAKRA")
    tri = v["tri_pataki"]
    for name, sector in tri["sectors"].items():
        planets = ", ".join(sector["planets"]) or "-"
        print(f"  {name:<8} {'/'.join(sector['signs']):<36} {planets}")
    print(f"  Dominant    : {tri['dominant']}")

    print_section("MUDDA DASHA")
    print(f"  {'Lord':<10} {'Start':<14} {'End':<14} {'Days':<6}")
    print(f"  {'─'*10} {'─'*14} {'─'*14} {'─'*6}")
    for p in v["mudda_dasha"]:
        print(f"  {p['lord']:<10} {p['start']:<14} {p['end']:<14} {p['duration_days']:<6}")
    cur = v["current_mudda"]
    if cur:
        print(f"\n  Current     : {cur['lord']} ({cur['start']} → {cur['end']})")

    print("\n")


if __name__ == "__main__":
    run_demo()
