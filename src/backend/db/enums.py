"""
Enumerations stored on database rows.

Values are persisted as plain strings (non-native enums) so the same schema
works on PostgreSQL and SQLite.
"""

from enum import Enum


class RequestStatus(str, Enum):
    """Lifecycle status of a service request."""

    OPEN = "open"
    CLAIMED = "claimed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (RequestStatus.COMPLETED, RequestStatus.CANCELLED)

    @property
    def accepts_chat(self) -> bool:
        return self in (RequestStatus.CLAIMED, RequestStatus.IN_PROGRESS)


# Bump whenever ServiceType gains or loses a member.
SERVICE_TYPES_VERSION = "2024.1"


class ServiceType(str, Enum):
    """Catalog of ground services a pilot can request."""

    # Fuel and power
    FUEL = "fuel"
    FUEL_FULL_SERVICE = "fuel_full_service"
    GPU_CONNECTION = "gpu_connection"
    APU_CONNECTION = "apu_connection"
    AIR_CONDITIONING_GROUND = "air_conditioning_ground"

    # Baggage and cargo
    BAGGAGE_LOADING = "baggage_loading"
    BAGGAGE_UNLOADING = "baggage_unloading"
    CARGO_LOADING = "cargo_loading"
    CARGO_UNLOADING = "cargo_unloading"

    # Catering
    CATERING_FULL_SERVICE = "catering_full_service"
    CATERING_BEVERAGE_ONLY = "catering_beverage_only"
    CATERING_MEAL_SERVICE = "catering_meal_service"

    # Maintenance
    MAINTENANCE_LINE = "maintenance_line"
    MAINTENANCE_HEAVY = "maintenance_heavy"
    MAINTENANCE_INSPECTION = "maintenance_inspection"

    # Cleaning
    CLEANING_CABIN_FULL = "cleaning_cabin_full"
    CLEANING_CABIN_LIGHT = "cleaning_cabin_light"
    CLEANING_EXTERIOR = "cleaning_exterior"

    # Pushback and towing
    PUSHBACK = "pushback"
    PUSHBACK_WITH_START = "pushback_with_start"
    TOWING_TO_GATE = "towing_to_gate"
    TOWING_TO_MAINTENANCE = "towing_to_maintenance"

    # Passengers and security
    SECURITY_CHECK = "security_check"
    PASSENGER_BOARDING = "passenger_boarding"
    PASSENGER_DEBOARDING = "passenger_deboarding"
    PASSENGER_SPECIAL_ASSISTANCE = "passenger_special_assistance"

    # De-icing
    DE_ICING = "de_icing"
    ANTI_ICING = "anti_icing"

    # Lavatory and water
    LAVATORY_SERVICE = "lavatory_service"
    WATER_SERVICE_POTABLE = "water_service_potable"
    WATER_SERVICE_GRAY = "water_service_gray"

    # Stairs and jetbridge
    STAIRS_POSITIONING = "stairs_positioning"
    STAIRS_REMOVAL = "stairs_removal"
    JETBRIDGE_CONNECTION = "jetbridge_connection"
    JETBRIDGE_DISCONNECTION = "jetbridge_disconnection"

    # Marshalling
    MARSHALLING_ARRIVAL = "marshalling_arrival"
    MARSHALLING_DEPARTURE = "marshalling_departure"

    # Customs and immigration
    CUSTOMS_INSPECTION = "customs_inspection"
    IMMIGRATION_CHECK = "immigration_check"

    # Ground transport
    GROUND_TRANSPORT_CREW = "ground_transport_crew"
    GROUND_TRANSPORT_PASSENGER = "ground_transport_passenger"
    WHEELCHAIR_ASSISTANCE = "wheelchair_assistance"

    # Special cargo
    SPECIAL_CARGO_HANDLING = "special_cargo_handling"
    DANGEROUS_GOODS_HANDLING = "dangerous_goods_handling"
    LIVE_ANIMALS_HANDLING = "live_animals_handling"

    # Engine and inspections
    ENGINE_START_ASSISTANCE = "engine_start_assistance"
    PRE_FLIGHT_INSPECTION = "pre_flight_inspection"
    POST_FLIGHT_INSPECTION = "post_flight_inspection"
    WALK_AROUND_INSPECTION = "walk_around_inspection"

    # Aircraft servicing
    TIRE_PRESSURE_CHECK = "tire_pressure_check"
    OIL_SERVICE = "oil_service"
    HYDRAULIC_SERVICE = "hydraulic_service"
    NITROGEN_SERVICE_TIRES = "nitrogen_service_tires"
    OXYGEN_SERVICE_CREW = "oxygen_service_crew"

    # Cabin and galley
    CABIN_SERVICE_SUPPLIES = "cabin_service_supplies"
    GALLEY_SERVICE_FULL = "galley_service_full"
    GALLEY_RESTOCKING = "galley_restocking"

    # Safety equipment
    EMERGENCY_EQUIPMENT_CHECK = "emergency_equipment_check"
    LIFE_VEST_CHECK = "life_vest_check"
    FIRE_EXTINGUISHER_CHECK = "fire_extinguisher_check"

    # Documentation and planning
    CARGO_DOCUMENTATION = "cargo_documentation"
    WEIGHT_BALANCE_CALCULATION = "weight_balance_calculation"
    FLIGHT_PLANNING_SUPPORT = "flight_planning_support"
    METEOROLOGICAL_BRIEFING = "meteorological_briefing"

    # Crew services
    CREW_TRANSPORT_HOTEL = "crew_transport_hotel"
    CREW_BRIEFING_ROOM = "crew_briefing_room"

    # Parking and hangar
    AIRCRAFT_PARKING_OVERNIGHT = "aircraft_parking_overnight"
    AIRCRAFT_PARKING_TRANSIT = "aircraft_parking_transit"
    HANGAR_SERVICE_MAINTENANCE = "hangar_service_maintenance"
    HANGAR_SERVICE_STORAGE = "hangar_service_storage"

    # Coordination and clearance
    RAMP_COORDINATION = "ramp_coordination"
    SLOT_COORDINATION = "slot_coordination"
    CUSTOMS_CLEARANCE = "customs_clearance"
    IMMIGRATION_PROCESSING = "immigration_processing"
