"""Output formatters for scored months and day details."""

import json

from stargazer.models.score import DayResult, MonthReport, ScoreTier

UNAVAILABLE = "-"
WEEKDAY_HEADER = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
TIER_MARKS = {ScoreTier.GOOD: "*", ScoreTier.NORMAL: "+", ScoreTier.BAD: " "}
CELL_WIDTH = 8


def format_month_text(r: MonthReport) -> str:
    """Calendar grid, Sunday first. Each cell shows day and score."""
    lines = [
        f"=== Stargazing Index {r.year}-{r.month:02d} ===",
        "".join(f"{name:<{CELL_WIDTH}}" for name in WEEKDAY_HEADER).rstrip(),
    ]
    cells = [" " * CELL_WIDTH] * r.first_weekday
    for d in r.days:
        cells.append(f"{_cell(d):<{CELL_WIDTH}}")
    for i in range(0, len(cells), 7):
        lines.append("".join(cells[i:i + 7]).rstrip())

    if r.is_empty:
        lines.append("No forecast available for this month yet.")
    else:
        lines.append(f"Forecast days: {r.available_days}/{r.days_in_month}")
        best = r.best_day
        if best is not None and best.score is not None:
            lines.append(
                f"Best night: {best.date.isoformat()} "
                f"({best.score.total_score}, {best.score.tier.value})"
            )
    lines.append("* good (>=80)  + normal (>=50)")
    return "\n".join(lines)


def _cell(d: DayResult) -> str:
    if d.score is None:
        return f"{d.day:>2} {UNAVAILABLE}"
    return f"{d.day:>2} {d.score.total_score:>3}{TIER_MARKS[d.score.tier]}"


def day_to_dict(d: DayResult) -> dict:
    data: dict = {"day": d.day, "date": d.date.isoformat(), "available": d.available}
    if d.score is not None:
        data.update(
            {
                "total_score": d.score.total_score,
                "tier": d.score.tier.value,
                "cloud_cover_percent": d.score.cloud_cover_percent,
                "moon_phase": d.score.moon_phase_display_name,
                "weather": d.score.weather_display_name,
                "cloud_term": d.score.cloud_term,
                "moon_term": d.score.moon_term,
                "weather_bonus": d.score.weather_bonus,
            }
        )
    else:
        data["total_score"] = None
    return data


def month_to_dict(r: MonthReport) -> dict:
    best = r.best_day
    return {
        "year": r.year,
        "month": r.month,
        "days_in_month": r.days_in_month,
        "first_weekday": r.first_weekday,
        "is_empty": r.is_empty,
        "available_days": r.available_days,
        "best_day": best.day if best is not None else None,
        "days": [day_to_dict(d) for d in r.days],
    }


def format_month_json(r: MonthReport) -> str:
    """JSON report for programmatic consumption."""
    return json.dumps(month_to_dict(r), indent=2, ensure_ascii=False)


def format_day_text(d: DayResult, observation_hour: int = 21) -> str:
    """Detail view for one night."""
    header = f"=== {d.date.isoformat()} ==="
    if d.score is None:
        return f"{header}\nNo forecast available for this night."
    s = d.score
    return "\n".join(
        [
            header,
            f"Stargazing index: {s.total_score} / 100 ({s.tier.value})",
            f"Cloud cover ({observation_hour:02d}:00): {s.cloud_cover_percent}%",
            f"Moon phase: {s.moon_phase_display_name}",
            f"Weather: {s.weather_display_name}",
        ]
    )


def format_month_chat(r: MonthReport) -> str:
    """Chat-friendly markdown summary."""
    lines = [f"**Stargazing Index** {r.year}-{r.month:02d}"]
    if r.is_empty:
        lines.append("- No forecast available yet")
        return "\n".join(lines)

    good = [d for d in r.days if d.score is not None and d.score.tier == ScoreTier.GOOD]
    lines.append(f"- Forecast days: {r.available_days}/{r.days_in_month}")
    lines.append(f"- Good nights: {len(good)}")
    for d in good:
        lines.append(
            f"  - {d.date.isoformat()}: {d.score.total_score} "
            f"({d.score.moon_phase_display_name}, {d.score.weather_display_name})"
        )
    best = r.best_day
    if best is not None and best.score is not None:
        lines.append(f"- Best: {best.date.isoformat()} ({best.score.total_score})")
    return "\n".join(lines)
