"""Fixed vocabularies offered to dealers and shoppers."""
from __future__ import annotations

REGIONS: tuple[str, ...] = (
    "Barima-Waini (Region 1)",
    "Pomeroon-Supenaam (Region 2)",
    "Essequibo Islands-West Demerara (Region 3)",
    "Demerara-Mahaica (Region 4)",
    "Mahaica-Berbice (Region 5)",
    "East Berbice-Corentyne (Region 6)",
    "Cuyuni-Mazaruni (Region 7)",
    "Potaro-Siparuni (Region 8)",
    "Upper Takutu-Upper Essequibo (Region 9)",
    "Upper Demerara-Berbice (Region 10)",
)

BODY_TYPES: tuple[str, ...] = (
    "Sedan",
    "SUV",
    "Pickup",
    "Hatchback",
    "Wagon",
    "Van",
    "Truck",
    "Coupe",
    "Bus",
)

MAKES: tuple[str, ...] = (
    "Acura", "Alfa Romeo", "Audi", "Bentley", "BMW", "BYD", "Cadillac", "Chevrolet",
    "Chrysler", "Citroen", "DAF", "Daihatsu", "Dodge", "Fiat", "Ford", "Foton",
    "Genesis", "GMC", "Honda", "Hummer", "Hyundai", "Infiniti", "Isuzu", "Jaguar",
    "Jeep", "JMC", "Kia", "Land Rover", "Lexus", "Mack", "MAN", "Mazda",
    "Mercedes-Benz", "MG", "Mini", "Mitsubishi", "Nissan", "Peugeot", "Porsche",
    "Ram", "Renault", "Scion", "Subaru", "Suzuki", "Tesla", "Toyota", "Volkswagen",
    "Volvo", "Yamaha", "Other",
)

SAFETY_FEATURES: tuple[str, ...] = (
    "Anti-Lock Braking System",
    "Airbags",
    "Traction Control",
    "Stability Control",
    "Parking Sensors",
    "Backup Camera",
    "Blind Spot Monitor",
    "Lane Departure Warning",
    "Adaptive Cruise Control",
)

COMFORT_FEATURES: tuple[str, ...] = (
    "Air Conditioning",
    "Climate Control",
    "Heated Seats",
    "Ventilated Seats",
    "Power Seats",
    "Leather Seats",
    "Sunroof",
    "Keyless Entry",
    "Push Button Start",
    "Cruise Control",
)

INTERIOR_FEATURES: tuple[str, ...] = (
    "Premium Sound System",
    "Navigation System",
    "Touchscreen Display",
    "Apple CarPlay",
    "Android Auto",
    "Wireless Charging",
    "USB Ports",
    "Ambient Lighting",
    "Power Windows",
    "Tinted Windows",
)

EXTERIOR_FEATURES: tuple[str, ...] = (
    "Alloy Wheels",
    "LED Headlights",
    "Fog Lights",
    "Roof Rack",
    "Spoiler",
    "Running Boards",
    "Power Mirrors",
    "Heated Mirrors",
    "Rain Sensing Wipers",
    "Tow Package",
)
