from enum import Enum, IntEnum

class Archetype(str, Enum):
    # Stored values match existing persisted records
    SAAS_ENTRY = "SaaS de Entrada"
    SAAS_VERTICAL = "SaaS Verticalizado"
    SERVICE_TECH = "Serviço + Tecnologia"
    PLATFORM = "Plataforma de Automação"
    INTERNAL = "Interno / Marketing"

class IntensityLevel(IntEnum):
    L1 = 1
    L2 = 2
    L3 = 3
    L4 = 4

class RDEStatus(str, Enum):
    # Lead temperature, set by hand or by the assistant
    HOT = "Quente"
    WARM = "Morno"
    COLD = "Frio"

class RdeQuadrant(str, Enum):
    SPRINT_ATTACK = "sprint_attack"        # high velocity, high viability
    STRATEGIC_PLAN = "strategic_plan"      # low velocity, high viability
    MVP_PARTNERSHIP = "mvp_partnership"    # high velocity, low viability
    DISCARD_HOLD = "discard_hold"          # low on both

class ProjectStatus(str, Enum):
    ACTIVE = "Active"
    NEGOTIATION = "Negotiation"
    FUTURE = "Future"
    ARCHIVED = "Archived"
    FROZEN = "Frozen"
    PRIORITY = "Priority"
    HIGH = "High"

class TadsBand(str, Enum):
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"
