"""
Construction Task Catalog

Task templates keyed by project type, plus the recurring and milestone
templates used across the project lifecycle. Each template carries:
- Phase, default priority and baseline hours
- Weather and inspection flags
- Safety, equipment and material lists
- An optional three-point effort estimate and known risks
"""

from dataclasses import dataclass, field
from typing import Optional

from ..schemas.answers import ProjectType
from ..schemas.generated_task import EffortEstimate, TaskRisk


@dataclass(frozen=True)
class TaskTemplate:
    """A catalog entry instantiated into a GeneratedTask."""
    title: str
    description: str
    priority: str
    estimated_hours: float
    phase_name: str
    weather_dependent: bool
    requires_inspection: bool
    safety_requirements: tuple[str, ...] = ()
    equipment_needed: tuple[str, ...] = ()
    materials_needed: tuple[str, ...] = ()
    subtasks: tuple[str, ...] = ()
    loe: Optional[EffortEstimate] = None
    risks: tuple[TaskRisk, ...] = ()


@dataclass(frozen=True)
class RecurringTaskTemplate:
    """A task repeated at a fixed interval while the project runs."""
    title: str
    description: str
    priority: str
    estimated_hours: float
    phase_name: str
    pattern: str  # daily, weekly, biweekly, monthly
    applicable_phases: tuple[str, ...]
    weather_dependent: bool = False
    safety_requirements: tuple[str, ...] = ()


@dataclass(frozen=True)
class MilestoneTaskTemplate:
    """Tasks that become due once the project reaches a completion level."""
    milestone_name: str
    completion_percentage: int
    triggered_tasks: tuple[TaskTemplate, ...] = field(default_factory=tuple)


RECURRENCE_INTERVAL_DAYS = {
    "daily": 1,
    "weekly": 7,
    "biweekly": 14,
    "monthly": 30,
}

MAX_RECURRING_INSTANCES = 100

DEFAULT_PHASES = ("Pre-Construction", "Construction", "Post-Construction")


# =============================================================================
# RESIDENTIAL
# =============================================================================
RESIDENTIAL_TASKS = (
    TaskTemplate(
        title="Site Survey and Preparation",
        description="Conduct site survey, mark utilities, and prepare construction area",
        priority="high",
        estimated_hours=16,
        phase_name="Pre-Construction",
        weather_dependent=True,
        requires_inspection=True,
        safety_requirements=("High-visibility vests", "Hard hats", "Safety boots"),
        equipment_needed=("Transit", "Measuring tools", "Marking spray"),
        materials_needed=("Survey stakes", "Caution tape"),
        subtasks=("Boundary Survey", "Utility Marking", "Topographical Survey",
                  "Soil Testing", "Access Road Setup", "Site Security Setup"),
        loe=EffortEstimate(12, 16, 24, confidence_level=85),
        risks=(
            TaskRisk("low", "weather", "Rain affecting survey accuracy",
                     "Schedule for clear weather, use weather-resistant equipment", 25, "low"),
            TaskRisk("medium", "technical", "Unknown utility lines not marked",
                     "Call 811, use ground penetrating radar if needed", 20, "high"),
        ),
    ),
    TaskTemplate(
        title="Foundation Excavation",
        description="Excavate foundation area according to architectural plans",
        priority="high",
        estimated_hours=24,
        phase_name="Foundation",
        weather_dependent=True,
        requires_inspection=True,
        safety_requirements=("Shoring equipment", "Hard hats", "Safety boots"),
        equipment_needed=("Excavator", "Dump truck", "Laser level"),
        materials_needed=("Gravel backfill", "Foundation forms"),
        subtasks=("Site Layout", "Rough Excavation", "Fine Grading",
                  "Utilities Rough-in", "Foundation Forms", "Backfill Prep"),
        loe=EffortEstimate(20, 24, 32, confidence_level=80),
        risks=(
            TaskRisk("medium", "weather", "Rain causing excavation delays and safety issues",
                     "Monitor weather, have dewatering equipment ready", 40, "medium"),
            TaskRisk("high", "technical", "Unexpected soil conditions or groundwater",
                     "Geotechnical survey, soil engineer consultation", 30, "high"),
            TaskRisk("low", "safety", "Cave-in or slope failure",
                     "Proper shoring, daily safety inspections", 10, "critical"),
        ),
    ),
    TaskTemplate(
        title="Foundation Pour",
        description="Pour concrete foundation and install anchor bolts",
        priority="critical",
        estimated_hours=32,
        phase_name="Foundation",
        weather_dependent=True,
        requires_inspection=True,
        safety_requirements=("Hard hats", "Safety boots", "Gloves"),
        equipment_needed=("Concrete mixer", "Vibrator", "Float"),
        materials_needed=("Ready-mix concrete", "Rebar", "Anchor bolts"),
        subtasks=("Rebar Installation", "Form Setup", "Concrete Ordering",
                  "Pour Preparation", "Concrete Pour", "Finishing & Curing"),
        loe=EffortEstimate(28, 32, 40, confidence_level=75,
                           complexity_factor="complex", skill_level_required="senior"),
        risks=(
            TaskRisk("high", "weather", "Temperature extremes affecting concrete quality",
                     "Use appropriate concrete mix, temperature monitoring", 35, "high"),
            TaskRisk("medium", "quality", "Improper concrete placement or finishing",
                     "Experienced crew, quality control procedures", 15, "critical"),
            TaskRisk("low", "schedule", "Concrete delivery delays",
                     "Backup suppliers, early ordering", 20, "medium"),
        ),
    ),
    TaskTemplate(
        title="Framing",
        description="Install wall framing, roof trusses, and structural elements",
        priority="high",
        estimated_hours=80,
        phase_name="Structure",
        weather_dependent=False,
        requires_inspection=True,
        safety_requirements=("Fall protection", "Hard hats", "Safety glasses"),
        equipment_needed=("Nail guns", "Circular saws", "Crane"),
        materials_needed=("Lumber", "Nails", "Structural hardware"),
        subtasks=("Wall Layout", "Bottom Plates", "Wall Framing",
                  "Top Plates", "Roof Trusses", "Sheathing Installation"),
        loe=EffortEstimate(70, 80, 96, confidence_level=85),
        risks=(
            TaskRisk("medium", "safety", "Falls from elevated work areas",
                     "Proper fall protection, safety training", 20, "critical"),
            TaskRisk("low", "technical", "Framing alignment and square issues",
                     "Regular measurements, experienced crew", 15, "medium"),
            TaskRisk("low", "weather", "High winds affecting crane operations",
                     "Wind monitoring, work restrictions", 25, "low"),
        ),
    ),
    TaskTemplate(
        title="Roofing Installation",
        description="Install roofing materials and weatherproofing",
        priority="high",
        estimated_hours=40,
        phase_name="Structure",
        weather_dependent=True,
        requires_inspection=True,
        safety_requirements=("Fall protection", "Hard hats", "Safety harnesses"),
        equipment_needed=("Roofing nailer", "Safety ropes", "Ladders"),
        materials_needed=("Shingles", "Underlayment", "Flashing"),
    ),
    TaskTemplate(
        title="Electrical Rough-In",
        description="Install electrical wiring, panels, and rough electrical components",
        priority="medium",
        estimated_hours=48,
        phase_name="Systems",
        weather_dependent=False,
        requires_inspection=True,
        safety_requirements=("Electrical safety training", "Insulated tools"),
        equipment_needed=("Wire strippers", "Drill", "Fish tape"),
        materials_needed=("Electrical wire", "Conduit", "Junction boxes"),
    ),
    TaskTemplate(
        title="Plumbing Rough-In",
        description="Install plumbing pipes, fixtures rough-in, and water lines",
        priority="medium",
        estimated_hours=40,
        phase_name="Systems",
        weather_dependent=False,
        requires_inspection=True,
        safety_requirements=("Eye protection", "Gloves"),
        equipment_needed=("Pipe cutters", "Soldering torch", "Pipe wrenches"),
        materials_needed=("PVC pipes", "Copper pipes", "Fittings"),
    ),
    TaskTemplate(
        title="Insulation Installation",
        description="Install thermal insulation in walls, ceiling, and floors",
        priority="medium",
        estimated_hours=24,
        phase_name="Insulation",
        weather_dependent=False,
        requires_inspection=False,
        safety_requirements=("Respirator", "Long sleeves", "Eye protection"),
        equipment_needed=("Staple gun", "Utility knife"),
        materials_needed=("Fiberglass insulation", "Vapor barrier", "Staples"),
    ),
    TaskTemplate(
        title="Drywall Installation",
        description="Hang, tape, and finish drywall throughout structure",
        priority="medium",
        estimated_hours=56,
        phase_name="Interior",
        weather_dependent=False,
        requires_inspection=False,
        safety_requirements=("Dust masks", "Eye protection"),
        equipment_needed=("Drywall lift", "Taping tools", "Sanders"),
        materials_needed=("Drywall sheets", "Joint compound", "Tape"),
    ),
    TaskTemplate(
        title="Interior Painting",
        description="Prime and paint all interior walls and ceilings",
        priority="low",
        estimated_hours=40,
        phase_name="Finishes",
        weather_dependent=False,
        requires_inspection=False,
        safety_requirements=("Ventilation", "Drop cloths"),
        equipment_needed=("Brushes", "Rollers", "Sprayer"),
        materials_needed=("Primer", "Paint", "Drop cloths"),
    ),
    TaskTemplate(
        title="Flooring Installation",
        description="Install flooring materials throughout the structure",
        priority="medium",
        estimated_hours=32,
        phase_name="Finishes",
        weather_dependent=False,
        requires_inspection=False,
        safety_requirements=("Knee pads", "Eye protection"),
        equipment_needed=("Miter saw", "Nailer", "Spacers"),
        materials_needed=("Flooring material", "Underlayment", "Trim"),
    ),
    TaskTemplate(
        title="Final Electrical",
        description="Install outlets, switches, fixtures, and final electrical components",
        priority="medium",
        estimated_hours=24,
        phase_name="Finishes",
        weather_dependent=False,
        requires_inspection=True,
        safety_requirements=("Electrical safety training", "Circuit tester"),
        equipment_needed=("Wire strippers", "Screwdrivers", "Multimeter"),
        materials_needed=("Outlets", "Switches", "Light fixtures"),
    ),
    TaskTemplate(
        title="Final Plumbing",
        description="Install plumbing fixtures, faucets, and final connections",
        priority="medium",
        estimated_hours=16,
        phase_name="Finishes",
        weather_dependent=False,
        requires_inspection=True,
        safety_requirements=("Eye protection", "Gloves"),
        equipment_needed=("Wrenches", "Caulk gun", "Level"),
        materials_needed=("Fixtures", "Faucets", "Caulk"),
    ),
    TaskTemplate(
        title="Final Cleanup and Inspection",
        description="Complete final cleanup and prepare for final inspection",
        priority="high",
        estimated_hours=16,
        phase_name="Completion",
        weather_dependent=False,
        requires_inspection=True,
        safety_requirements=("Standard PPE",),
        equipment_needed=("Cleaning supplies", "Vacuum", "Touch-up tools"),
        materials_needed=("Cleaning materials", "Touch-up paint"),
    ),
)


# =============================================================================
# COMMERCIAL
# =============================================================================
COMMERCIAL_TASKS = (
    TaskTemplate(
        title="Site Analysis and Preparation",
        description="Comprehensive site survey, soil analysis, and construction area preparation",
        priority="critical",
        estimated_hours=40,
        phase_name="Pre-Construction",
        weather_dependent=True,
        requires_inspection=True,
        safety_requirements=("High-visibility vests", "Hard hats", "Safety boots"),
        equipment_needed=("Survey equipment", "Soil testing tools"),
        materials_needed=("Survey markers", "Safety barriers"),
    ),
    TaskTemplate(
        title="Foundation and Structural",
        description="Commercial-grade foundation and structural framework installation",
        priority="critical",
        estimated_hours=120,
        phase_name="Foundation",
        weather_dependent=True,
        requires_inspection=True,
        safety_requirements=("Fall protection", "Heavy equipment safety"),
        equipment_needed=("Crane", "Heavy machinery", "Welding equipment"),
        materials_needed=("Steel beams", "Commercial concrete", "Rebar"),
    ),
    TaskTemplate(
        title="MEP Systems Installation",
        description="Mechanical, Electrical, and Plumbing systems for commercial use",
        priority="high",
        estimated_hours=160,
        phase_name="Systems",
        weather_dependent=False,
        requires_inspection=True,
        safety_requirements=("Electrical certification", "Confined space training"),
        equipment_needed=("Commercial electrical tools", "Pipe threading machines"),
        materials_needed=("Commercial-grade wiring", "HVAC equipment", "Commercial plumbing"),
    ),
    TaskTemplate(
        title="Fire Safety and Security Systems",
        description="Install fire suppression, alarm, and security systems",
        priority="critical",
        estimated_hours=80,
        phase_name="Systems",
        weather_dependent=False,
        requires_inspection=True,
        safety_requirements=("Fire safety training", "System certification"),
        equipment_needed=("System testing tools", "Cable pullers"),
        materials_needed=("Fire suppression equipment", "Security cameras", "Alarm systems"),
    ),
    TaskTemplate(
        title="Commercial Finishes",
        description="Commercial-grade interior finishes and furnishings",
        priority="medium",
        estimated_hours=100,
        phase_name="Finishes",
        weather_dependent=False,
        requires_inspection=False,
        safety_requirements=("Standard commercial PPE",),
        equipment_needed=("Commercial finishing tools",),
        materials_needed=("Commercial flooring", "Ceiling systems", "Commercial fixtures"),
    ),
    TaskTemplate(
        title="Final Commissioning",
        description="System testing, commissioning, and final approvals",
        priority="critical",
        estimated_hours=60,
        phase_name="Completion",
        weather_dependent=False,
        requires_inspection=True,
        safety_requirements=("System operation training",),
        equipment_needed=("Testing equipment", "Commissioning tools"),
        materials_needed=("Documentation materials",),
    ),
)


# =============================================================================
# RENOVATION
# =============================================================================
RENOVATION_TASKS = (
    TaskTemplate(
        title="Existing Conditions Assessment",
        description="Document existing conditions and identify renovation scope",
        priority="high",
        estimated_hours=16,
        phase_name="Pre-Construction",
        weather_dependent=False,
        requires_inspection=False,
        safety_requirements=("Hard hats", "Safety glasses"),
        equipment_needed=("Camera", "Measuring tools", "Inspection equipment"),
        materials_needed=("Documentation materials",),
    ),
    TaskTemplate(
        title="Selective Demolition",
        description="Carefully remove specified existing elements",
        priority="high",
        estimated_hours=32,
        phase_name="Demolition",
        weather_dependent=False,
        requires_inspection=True,
        safety_requirements=("Dust masks", "Eye protection", "Heavy gloves"),
        equipment_needed=("Demolition tools", "Dumpster", "Dust barriers"),
        materials_needed=("Plastic sheeting", "Disposal bags"),
    ),
    TaskTemplate(
        title="System Upgrades",
        description="Update electrical, plumbing, and HVAC systems as needed",
        priority="high",
        estimated_hours=64,
        phase_name="Systems",
        weather_dependent=False,
        requires_inspection=True,
        safety_requirements=("Trade-specific safety requirements",),
        equipment_needed=("Trade-specific tools",),
        materials_needed=("Updated system components",),
    ),
    TaskTemplate(
        title="Renovation Construction",
        description="Execute renovation work according to design plans",
        priority="medium",
        estimated_hours=80,
        phase_name="Construction",
        weather_dependent=False,
        requires_inspection=True,
        safety_requirements=("Standard construction PPE",),
        equipment_needed=("Construction tools",),
        materials_needed=("New construction materials",),
    ),
    TaskTemplate(
        title="Finish Work",
        description="Apply final finishes and complete renovation details",
        priority="medium",
        estimated_hours=40,
        phase_name="Finishes",
        weather_dependent=False,
        requires_inspection=False,
        safety_requirements=("Finish work PPE",),
        equipment_needed=("Finishing tools",),
        materials_needed=("Finish materials",),
    ),
)


# =============================================================================
# INDUSTRIAL
# =============================================================================
INDUSTRIAL_TASKS = (
    TaskTemplate(
        title="Site Survey and Environmental Review",
        description="Survey the site and review environmental and zoning requirements for industrial use",
        priority="critical",
        estimated_hours=48,
        phase_name="Pre-Construction",
        weather_dependent=True,
        requires_inspection=True,
        safety_requirements=("High-visibility vests", "Hard hats", "Safety boots"),
        equipment_needed=("Survey equipment", "Soil and water sampling kits"),
        materials_needed=("Survey markers", "Sample containers"),
    ),
    TaskTemplate(
        title="Heavy Foundation and Equipment Pads",
        description="Pour reinforced foundations and equipment pads for heavy machinery loads",
        priority="critical",
        estimated_hours=160,
        phase_name="Foundation",
        weather_dependent=True,
        requires_inspection=True,
        safety_requirements=("Heavy equipment safety", "Hard hats", "Safety boots"),
        equipment_needed=("Concrete pump", "Excavator", "Laser level"),
        materials_needed=("High-strength concrete", "Rebar", "Embedded anchor plates"),
        loe=EffortEstimate(140, 160, 220, confidence_level=70,
                           complexity_factor="complex", skill_level_required="senior"),
    ),
    TaskTemplate(
        title="Steel Structure Erection",
        description="Erect primary steel frame, crane rails and roof structure",
        priority="high",
        estimated_hours=200,
        phase_name="Structure",
        weather_dependent=True,
        requires_inspection=True,
        safety_requirements=("Fall protection", "Crane signal training", "Hard hats"),
        equipment_needed=("Mobile crane", "Welding equipment", "Aerial lifts"),
        materials_needed=("Structural steel", "Bolts", "Decking"),
    ),
    TaskTemplate(
        title="Process Utilities Installation",
        description="Install compressed air, process water, high-voltage power and ventilation",
        priority="high",
        estimated_hours=180,
        phase_name="Systems",
        weather_dependent=False,
        requires_inspection=True,
        safety_requirements=("Electrical certification", "Lockout/tagout training"),
        equipment_needed=("Pipe threading machines", "Cable pullers"),
        materials_needed=("Process piping", "Switchgear", "Ductwork"),
    ),
    TaskTemplate(
        title="Industrial Floor Coating",
        description="Prepare and coat production floors for chemical and load resistance",
        priority="medium",
        estimated_hours=60,
        phase_name="Finishes",
        weather_dependent=False,
        requires_inspection=False,
        safety_requirements=("Respirator", "Chemical-resistant gloves"),
        equipment_needed=("Floor grinder", "Coating rollers"),
        materials_needed=("Epoxy coating", "Primer"),
    ),
    TaskTemplate(
        title="Equipment Commissioning and Handover",
        description="Commission process equipment, run acceptance tests and hand over documentation",
        priority="critical",
        estimated_hours=80,
        phase_name="Completion",
        weather_dependent=False,
        requires_inspection=True,
        safety_requirements=("System operation training", "Lockout/tagout training"),
        equipment_needed=("Testing equipment", "Calibration tools"),
        materials_needed=("Documentation materials",),
    ),
)


# =============================================================================
# INSTITUTIONAL
# =============================================================================
INSTITUTIONAL_TASKS = (
    TaskTemplate(
        title="Site Survey and Stakeholder Review",
        description="Survey the site and review program requirements with the institution's stakeholders",
        priority="high",
        estimated_hours=40,
        phase_name="Pre-Construction",
        weather_dependent=True,
        requires_inspection=False,
        safety_requirements=("High-visibility vests", "Hard hats"),
        equipment_needed=("Survey equipment", "Measuring tools"),
        materials_needed=("Survey markers", "Documentation materials"),
    ),
    TaskTemplate(
        title="Foundation and Structure",
        description="Build foundations and structural frame to institutional code requirements",
        priority="critical",
        estimated_hours=140,
        phase_name="Foundation",
        weather_dependent=True,
        requires_inspection=True,
        safety_requirements=("Fall protection", "Hard hats", "Safety boots"),
        equipment_needed=("Crane", "Concrete pump", "Welding equipment"),
        materials_needed=("Structural steel", "Concrete", "Rebar"),
    ),
    TaskTemplate(
        title="Accessibility and Life Safety Systems",
        description="Install accessible routes, elevators, fire alarm and emergency lighting",
        priority="critical",
        estimated_hours=100,
        phase_name="Systems",
        weather_dependent=False,
        requires_inspection=True,
        safety_requirements=("Fire safety training", "Electrical certification"),
        equipment_needed=("System testing tools", "Cable pullers"),
        materials_needed=("Fire alarm panels", "Emergency lighting", "Elevator components"),
    ),
    TaskTemplate(
        title="MEP Systems Installation",
        description="Mechanical, electrical and plumbing systems sized for public occupancy",
        priority="high",
        estimated_hours=150,
        phase_name="Systems",
        weather_dependent=False,
        requires_inspection=True,
        safety_requirements=("Confined space training", "Insulated tools"),
        equipment_needed=("Pipe threading machines", "Duct lifts"),
        materials_needed=("HVAC equipment", "Commercial plumbing", "Wiring"),
    ),
    TaskTemplate(
        title="Interior Finishes and Furnishings",
        description="Durable interior finishes, casework and fixed furnishings",
        priority="medium",
        estimated_hours=110,
        phase_name="Finishes",
        weather_dependent=False,
        requires_inspection=False,
        safety_requirements=("Standard PPE",),
        equipment_needed=("Finishing tools", "Lifts"),
        materials_needed=("Flooring", "Casework", "Ceiling systems"),
    ),
    TaskTemplate(
        title="Occupancy Inspection and Handover",
        description="Final code inspections, certificate of occupancy and owner training",
        priority="critical",
        estimated_hours=50,
        phase_name="Completion",
        weather_dependent=False,
        requires_inspection=True,
        safety_requirements=("Standard PPE",),
        equipment_needed=("Testing equipment",),
        materials_needed=("Documentation materials", "Operation manuals"),
    ),
)


# =============================================================================
# GENERIC (other / unknown project types)
# =============================================================================
GENERIC_TASKS = (
    TaskTemplate(
        title="Site Survey and Planning",
        description="Survey the site, confirm scope and prepare the work area",
        priority="high",
        estimated_hours=16,
        phase_name="Pre-Construction",
        weather_dependent=True,
        requires_inspection=False,
        safety_requirements=("High-visibility vests", "Hard hats"),
        equipment_needed=("Measuring tools", "Marking spray"),
        materials_needed=("Survey stakes",),
    ),
    TaskTemplate(
        title="Permits and Approvals",
        description="File permit applications and obtain required approvals",
        priority="high",
        estimated_hours=12,
        phase_name="Pre-Construction",
        weather_dependent=False,
        requires_inspection=False,
        materials_needed=("Permit drawings", "Application forms"),
    ),
    TaskTemplate(
        title="Site Preparation",
        description="Clear the site, set up access and temporary facilities",
        priority="medium",
        estimated_hours=24,
        phase_name="Construction",
        weather_dependent=True,
        requires_inspection=False,
        safety_requirements=("Hard hats", "Safety boots"),
        equipment_needed=("Skid steer", "Dumpster"),
        materials_needed=("Temporary fencing", "Signage"),
    ),
    TaskTemplate(
        title="Main Construction Work",
        description="Carry out the primary construction scope",
        priority="medium",
        estimated_hours=80,
        phase_name="Construction",
        weather_dependent=False,
        requires_inspection=True,
        safety_requirements=("Standard construction PPE",),
        equipment_needed=("Construction tools",),
        materials_needed=("Construction materials",),
    ),
    TaskTemplate(
        title="Finishing Work",
        description="Complete finishes, trim and punch-list items",
        priority="medium",
        estimated_hours=32,
        phase_name="Finishes",
        weather_dependent=False,
        requires_inspection=False,
        safety_requirements=("Standard PPE",),
        equipment_needed=("Finishing tools",),
        materials_needed=("Finish materials",),
    ),
    TaskTemplate(
        title="Final Inspection and Closeout",
        description="Final walkthrough, inspection and project closeout documents",
        priority="high",
        estimated_hours=12,
        phase_name="Completion",
        weather_dependent=False,
        requires_inspection=True,
        safety_requirements=("Standard PPE",),
        materials_needed=("Closeout documentation",),
    ),
)


PROJECT_TASK_CATALOG: dict[str, tuple[TaskTemplate, ...]] = {
    ProjectType.RESIDENTIAL.value: RESIDENTIAL_TASKS,
    ProjectType.COMMERCIAL.value: COMMERCIAL_TASKS,
    ProjectType.RENOVATION.value: RENOVATION_TASKS,
    ProjectType.INDUSTRIAL.value: INDUSTRIAL_TASKS,
    ProjectType.INSTITUTIONAL.value: INSTITUTIONAL_TASKS,
    ProjectType.OTHER.value: GENERIC_TASKS,
}


def get_catalog(project_type: Optional[str]) -> tuple[TaskTemplate, ...]:
    """Templates for a project type; unknown types get the generic set."""
    key = (project_type or "").strip().lower()
    return PROJECT_TASK_CATALOG.get(key, GENERIC_TASKS)


# =============================================================================
# RECURRING TASKS
# =============================================================================
RECURRING_TASK_TEMPLATES = (
    RecurringTaskTemplate(
        title="Daily Safety Meeting",
        description="Conduct morning safety briefing with all team members",
        priority="high",
        estimated_hours=0.5,
        phase_name="Construction",
        pattern="daily",
        applicable_phases=("Construction", "Excavation", "Foundation", "Framing",
                           "Electrical", "Plumbing", "Finishing"),
        safety_requirements=("Team attendance",),
    ),
    RecurringTaskTemplate(
        title="Weekly Progress Report",
        description="Generate and submit weekly progress report to stakeholders",
        priority="medium",
        estimated_hours=2,
        phase_name="Administration",
        pattern="weekly",
        applicable_phases=("Pre-Construction", "Construction", "Post-Construction"),
    ),
    RecurringTaskTemplate(
        title="Weekly Site Cleanup",
        description="Comprehensive site cleanup and waste removal",
        priority="medium",
        estimated_hours=4,
        phase_name="Maintenance",
        pattern="weekly",
        applicable_phases=("Construction", "Excavation", "Foundation", "Framing",
                           "Electrical", "Plumbing", "Finishing"),
        safety_requirements=("Work gloves", "Safety boots"),
    ),
    RecurringTaskTemplate(
        title="Monthly Equipment Inspection",
        description="Inspect and maintain all construction equipment and tools",
        priority="medium",
        estimated_hours=3,
        phase_name="Equipment",
        pattern="monthly",
        applicable_phases=("Pre-Construction", "Construction", "Post-Construction"),
        safety_requirements=("Equipment safety protocols",),
    ),
    RecurringTaskTemplate(
        title="Biweekly Quality Control Inspection",
        description="Comprehensive quality control inspection of completed work",
        priority="high",
        estimated_hours=4,
        phase_name="Quality Control",
        pattern="biweekly",
        applicable_phases=("Construction", "Finishing"),
        safety_requirements=("Inspection checklist",),
    ),
)


# =============================================================================
# MILESTONE TASKS
# =============================================================================
MILESTONE_TASK_TEMPLATES = (
    MilestoneTaskTemplate(
        milestone_name="25% Project Completion",
        completion_percentage=25,
        triggered_tasks=(
            TaskTemplate(
                title="First Quarter Review Meeting",
                description="Review progress, budget, and timeline at 25% completion milestone",
                priority="high",
                estimated_hours=3,
                phase_name="Administration",
                weather_dependent=False,
                requires_inspection=False,
                loe=EffortEstimate(2, 3, 4, confidence_level=90,
                                   complexity_factor="low", skill_level_required="basic"),
            ),
            TaskTemplate(
                title="Budget Reconciliation",
                description="Reconcile actual costs with budget projections at quarter milestone",
                priority="medium",
                estimated_hours=2,
                phase_name="Administration",
                weather_dependent=False,
                requires_inspection=False,
                loe=EffortEstimate(1.5, 2, 3, confidence_level=85, complexity_factor="low"),
            ),
        ),
    ),
    MilestoneTaskTemplate(
        milestone_name="50% Project Completion",
        completion_percentage=50,
        triggered_tasks=(
            TaskTemplate(
                title="Mid-Project Assessment",
                description="Comprehensive mid-project assessment and course correction planning",
                priority="high",
                estimated_hours=4,
                phase_name="Administration",
                weather_dependent=False,
                requires_inspection=False,
                loe=EffortEstimate(3, 4, 6, confidence_level=85),
            ),
        ),
    ),
    MilestoneTaskTemplate(
        milestone_name="75% Project Completion",
        completion_percentage=75,
        triggered_tasks=(
            TaskTemplate(
                title="Pre-Completion Checklist Review",
                description="Review completion checklist and prepare for final phase",
                priority="high",
                estimated_hours=3,
                phase_name="Quality Control",
                weather_dependent=False,
                requires_inspection=True,
                loe=EffortEstimate(2, 3, 5, confidence_level=80),
            ),
            TaskTemplate(
                title="Client Walkthrough Preparation",
                description="Prepare site and documentation for client walkthrough",
                priority="medium",
                estimated_hours=2,
                phase_name="Client Relations",
                weather_dependent=False,
                requires_inspection=False,
                loe=EffortEstimate(1.5, 2, 3, confidence_level=90,
                                   complexity_factor="low", skill_level_required="basic"),
            ),
        ),
    ),
)
