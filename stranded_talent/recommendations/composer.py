"""
Recommendation composer: turns profile signals + selection into strategy text.

Composition order (fixed; first three always present)
------------------------------------------------------
    1. Age strategy          : young  / mature / neither
    2. Education strategy    : low    / high   / neither
    3. Sector strategy       : one template per SectorCategory (7 arms)
    4. College completion    : only if has_some_college
    5. Internal mobility     : always
    6. Entrepreneurship      : only if the target occupation matches
                               ENTREPRENEURSHIP_KEYWORDS

Every branch set ends in a default arm, so the list is never empty and never
shorter than four entries.

Templates are plain ``str.format`` strings.  Available placeholders:

    {occupation}  target occupation, or "front-line workers" when unset
    {region}      region_display_name(selection.region)
    {sector}      selected sector label
    {cohort}      selected cohort label
    {pct}         branch-specific share as a whole percentage (round half up)

Pure function: the same (signals, selection) always yields the identical list.
"""

from __future__ import annotations

from dataclasses import dataclass

from stranded_talent.models.selection import SelectionState
from stranded_talent.profile.classifier import ProfileSignals
from stranded_talent.taxonomy.labor_taxonomy import (
    ENTREPRENEURSHIP_KEYWORDS,
    SectorCategory,
    region_display_name,
)
from stranded_talent.utils.numbers import as_percent

GENERIC_OCCUPATION = "front-line workers"


@dataclass(frozen=True)
class Recommendation:
    """One strategy card: a short title and a one-paragraph body."""

    title: str
    body: str


# ── Templates ─────────────────────────────────────────────────────────────────

_AGE_YOUNG = (
    "Strategy: Early-Career Apprenticeship Pathways",
    "Most {cohort} workers among {occupation} across {region} are under 35. "
    "Registered apprenticeships and paid work-based learning inside the {sector} "
    "industry let early-career workers earn while they build credentials, "
    "converting entry-level jobs into the first rung of a wage ladder before "
    "workers stall.",
)
_AGE_MATURE = (
    "Strategy: Experienced-Worker Reskilling",
    "Most {cohort} workers among {occupation} across {region} are 45 or older. "
    "Short, employer-sponsored reskilling modules that credit existing "
    "experience, delivered on shift-compatible schedules, move seasoned {sector} "
    "workers into lead, inspection and training roles without a multi-year "
    "return to school.",
)
_AGE_MIXED = (
    "Strategy: Non-Degree Credential Alignment",
    "For {occupation} spread across age groups in {region}, non-degree "
    "credentials in high-demand technical fields have high rates of success. "
    "Recommend bridge funding for certificate programs with local community "
    "colleges aligned to {sector} employer hiring requirements.",
)

_EDU_LOW = (
    "Strategy: Foundational Skills & Credential On-Ramps",
    "{pct}% of this cohort holds a high school diploma or less. Pair adult "
    "basic education and GED completion with a first industry-recognized "
    "credential so workers can qualify for the next job up without leaving "
    "the labor market.",
)
_EDU_HIGH = (
    "Strategy: Degree-to-Role Matching",
    "{pct}% of this cohort already holds a bachelor's degree or higher. The "
    "barrier is job matching rather than training: fund career navigation, "
    "skills-based hiring commitments and employer partnerships that place "
    "degree holders in roles that use their education.",
)
_EDU_MIXED = (
    "Strategy: Stackable Credential Ladders",
    "This cohort spans the middle of the education range ({pct}% have some "
    "college but no degree). Stackable certificates that carry credit toward "
    "an associate's degree let workers advance one short credential at a time.",
)

_SECTOR_TEMPLATES: dict[SectorCategory, tuple[str, str]] = {
    SectorCategory.MANUFACTURING: (
        "Strategy: Wage-Boosting Skills Training",
        "Targeted micro-credentialing in high-value skills can boost wages for "
        "{occupation}. For {sector} roles, this includes advanced software "
        "proficiency (AutoCAD, ERP systems), quality control certifications "
        "(Six Sigma, Lean), safety credentials (OSHA 30-hour) and technical "
        "communication skills that position workers for supervisory roles.",
    ),
    SectorCategory.HEALTHCARE: (
        "Strategy: Clinical Career Ladders",
        "Build employer-funded ladders from entry-level support roles into "
        "licensed clinical positions (CNA to LPN to RN, technician "
        "certifications) across {region}. Tuition advancement tied to retention "
        "agreements addresses the {sector} staffing shortage while lifting wages "
        "for {occupation}.",
    ),
    SectorCategory.RETAIL_FOOD: (
        "Strategy: Skills-Adjacent Field Transition",
        "Customer-facing and operational skills of {occupation} transfer with "
        "high overlap to higher-paying logistics, inventory and supervisory "
        "roles. Short bridge programs in supply chain and shift management "
        "open exits from low-wage {sector} jobs.",
    ),
    SectorCategory.CONSTRUCTION: (
        "Strategy: Trade Licensure Acceleration",
        "Accelerate journeyman and contractor licensure for {occupation} in "
        "{region}: exam preparation, documented-hours tracking and "
        "pre-apprenticeship bridges into union and merit-shop programs convert "
        "informal {sector} experience into licensed, higher-wage work.",
    ),
    SectorCategory.PROFESSIONAL: (
        "Strategy: Digital Skills Upskilling",
        "Data, cloud and analytics certifications offer a direct wage premium "
        "for {occupation} in {sector}. Employer-paid, cohort-based bootcamps "
        "with guaranteed interviews move workers from support roles into "
        "analyst and specialist positions.",
    ),
    SectorCategory.EDUCATION: (
        "Strategy: Paraprofessional-to-Teacher Pathways",
        "Grow-your-own teacher residencies let paraprofessionals and support "
        "staff in {region} earn licensure while employed. Districts in the "
        "{sector} sector gain a local pipeline and {occupation} gain a "
        "salaried career track.",
    ),
    SectorCategory.OTHER: (
        "Strategy: Cross-Sector Skills Transfer",
        "Map the transferable skills of {occupation} to higher-wage openings "
        "in growing regional industries. Skills-based hiring agreements and "
        "short bridge training help {sector} workers in {region} move laterally "
        "into better-paid roles.",
    ),
}

_COLLEGE_COMPLETION = (
    "Strategy: College Completion Support",
    "{pct}% of this cohort of {occupation} in {region} has some college but no "
    "degree. Implement re-enrollment programs, flexible course scheduling and "
    "credit for prior learning assessments to help workers complete their "
    "degrees, unlocking career advancement opportunities.",
)

_INTERNAL_MOBILITY = (
    "Strategy: Internal Mobility Pathways",
    "Develop internal labor market ladders for {occupation}. Employer-led "
    "upskilling programs focusing on advanced tool usage or management lead "
    "to documented wage premiums for {cohort} populations in {region}.",
)

_ENTREPRENEURSHIP = (
    "Strategy: Entrepreneurship & Freelance Transition",
    "For {occupation} with established client relationships and specialized "
    "skills, transitioning to independent contracting or freelance work can "
    "increase earnings by 20-40%. Provide business development training, legal "
    "structure guidance (LLC formation) and access to platforms connecting "
    "skilled trades with commercial clients.",
)


# ── Composer ──────────────────────────────────────────────────────────────────


def compose_recommendations(
    signals: ProfileSignals,
    selection: SelectionState,
) -> list[Recommendation]:
    """Build the ordered strategy list for the current profile and selection.

    Args:
        signals:   Output of ``classify_profile()``.
        selection: Current selection (occupation, region, sector, cohort).

    Returns:
        Between four and six ``Recommendation`` entries in the fixed order
        documented at module level.
    """
    fields = {
        "occupation": selection.target_occupation or GENERIC_OCCUPATION,
        "region": region_display_name(selection.region),
        "sector": selection.sector,
        "cohort": str(selection.cohort),
    }

    recs: list[Recommendation] = []

    # 1. Age
    if signals.is_young_cohort:
        recs.append(_render(_AGE_YOUNG, fields))
    elif signals.is_mature_cohort:
        recs.append(_render(_AGE_MATURE, fields))
    else:
        recs.append(_render(_AGE_MIXED, fields))

    # 2. Education
    if signals.is_low_education:
        recs.append(_render(_EDU_LOW, fields, signals.low_education_share))
    elif signals.is_high_education:
        recs.append(_render(_EDU_HIGH, fields, signals.high_education_share))
    else:
        recs.append(_render(_EDU_MIXED, fields, signals.some_college_share))

    # 3. Sector
    recs.append(_render(_SECTOR_TEMPLATES[signals.sector_category], fields))

    # 4. College completion
    if signals.has_some_college:
        recs.append(_render(_COLLEGE_COMPLETION, fields, signals.some_college_share))

    # 5. Internal mobility
    recs.append(_render(_INTERNAL_MOBILITY, fields))

    # 6. Entrepreneurship
    if is_trade_occupation(selection.target_occupation):
        recs.append(_render(_ENTREPRENEURSHIP, fields))

    return recs


def is_trade_occupation(occupation: str | None) -> bool:
    """True when the occupation label names a trade or craft (case-insensitive)."""
    if not occupation:
        return False
    label = occupation.lower()
    return any(keyword in label for keyword in ENTREPRENEURSHIP_KEYWORDS)


def _render(
    template: tuple[str, str],
    fields: dict[str, str],
    share: float | None = None,
) -> Recommendation:
    title, body = template
    values = dict(fields)
    if share is not None:
        values["pct"] = str(as_percent(share))
    return Recommendation(title=title, body=body.format(**values))
