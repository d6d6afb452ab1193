from market_regime_engine.reporting.sections import FALLBACK_TITLE, ReportSection, parse_sections

FULL_REPLY = """**SIGNAL QUALITY**
Forecast tracks realized returns with a slight optimistic bias.

**REGIME ANALYSIS**
Bear regime drives most of the drawdown.

**RISK PROFILE**
Volatility doubles in the Volatile segment.

**KEY INSIGHT**
Signal holds in trending regimes only."""


def test_all_four_sections_extracted_in_order():
    sections = parse_sections(FULL_REPLY)
    assert [s.title for s in sections] == ["SIGNAL QUALITY", "REGIME ANALYSIS", "RISK PROFILE", "KEY INSIGHT"]
    assert sections[1] == ReportSection("REGIME ANALYSIS", "Bear regime drives most of the drawdown.")
    assert sections[-1].content == "Signal holds in trending regimes only."


def test_out_of_order_headers_are_returned_in_canonical_order():
    text = "**KEY INSIGHT** last first. **SIGNAL QUALITY** opening."
    sections = parse_sections(text)
    assert [s.title for s in sections] == ["SIGNAL QUALITY", "KEY INSIGHT"]
    assert sections[0].content == "opening."
    assert sections[1].content == "last first."


def test_missing_headers_are_skipped():
    sections = parse_sections("Preamble.\n**RISK PROFILE**\nTail risk is moderate.")
    assert sections == [ReportSection("RISK PROFILE", "Tail risk is moderate.")]


def test_repeated_header_keeps_first_occurrence():
    sections = parse_sections("**RISK PROFILE** one **RISK PROFILE** two")
    assert sections == [ReportSection("RISK PROFILE", "one")]


def test_other_bold_text_stays_inside_section():
    sections = parse_sections("**SIGNAL QUALITY** Good. **Note** still here.")
    assert sections[0].content == "Good. **Note** still here."


def test_no_headers_falls_back_to_single_section():
    sections = parse_sections("  Plain analysis without markers.  ")
    assert sections == [ReportSection(FALLBACK_TITLE, "Plain analysis without markers.")]


def test_blank_text_yields_nothing():
    assert parse_sections("") == []
    assert parse_sections("   \n") == []
