"""Enumeration types for the policy-request domain."""

from enum import Enum


class PolicyRequestStatus(str, Enum):
    RECEIVED = "RECEIVED"
    VALIDATED = "VALIDATED"
    PENDING = "PENDING"  # awaiting subscription after payment
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


class InsuranceCategory(str, Enum):
    AUTO = "AUTO"
    LIFE = "LIFE"
    RESIDENTIAL = "RESIDENTIAL"
    TRAVEL = "TRAVEL"
    HEALTH = "HEALTH"


class SalesChannel(str, Enum):
    MOBILE = "MOBILE"
    WEBSITE = "WEBSITE"
    BROKER = "BROKER"
    BANK = "BANK"
    CALL_CENTER = "CALL_CENTER"


class PaymentMethod(str, Enum):
    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"
    BANK_TRANSFER = "BANK_TRANSFER"
    BOLETO = "BOLETO"
    PIX = "PIX"


class RiskClassification(str, Enum):
    REGULAR = "REGULAR"
    HIGH_RISK = "HIGH_RISK"
    PREFERRED = "PREFERRED"
    NO_INFORMATION = "NO_INFORMATION"


class EventType(str, Enum):
    POLICY_REQUEST_CREATED = "PolicyRequestCreated"
    POLICY_VALIDATED = "PolicyValidated"
    POLICY_REJECTED = "PolicyRejected"
    SUBSCRIPTION_APPROVED = "SubscriptionApproved"
    POLICY_CANCELLED = "PolicyCancelled"
    PAYMENT_PROCESSED = "PaymentProcessed"
    PAYMENT_REJECTED = "PaymentRejected"
    PAYMENT_REQUESTED = "PaymentRequested"
    POLICY_STATUS_CHANGED = "PolicyStatusChanged"
