from enum import Enum


class ServiceType(str, Enum):
    PARCEL = "parcel"
    FREIGHT = "freight"

    def __str__(self):
        return self.value


class ServiceLevel(str, Enum):
    STANDARD = "standard"
    EXPRESS = "express"
    PRIORITY = "priority"

    def __str__(self):
        return self.value


class FreightMode(str, Enum):
    AIR = "air"
    SEA = "sea"
    ROAD = "road"

    def __str__(self):
        return self.value


class PaymentMethod(str, Enum):
    CARD = "card"
    COD = "cod"

    def __str__(self):
        return self.value


class DraftStatus(str, Enum):
    DRAFT = "draft"
    BOOKED = "booked"

    def __str__(self):
        return self.value
