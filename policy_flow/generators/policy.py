"""Policy request generator."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterator

from policy_flow.generators.base import BaseGenerator
from policy_flow.models.policy import (
    InsuranceCategory,
    PaymentMethod,
    PolicyRequest,
    SalesChannel,
)

CENTS = Decimal("0.01")


class PolicyRequestGenerator(BaseGenerator):
    """Generate synthetic policy requests with coverages and assistances."""

    # Coverage name -> share of the insured amount
    COVERAGES = {
        InsuranceCategory.AUTO: {
            "Collision": Decimal("0.60"),
            "Theft": Decimal("0.25"),
            "Third Party Liability": Decimal("0.15"),
        },
        InsuranceCategory.LIFE: {
            "Natural Death": Decimal("0.70"),
            "Accidental Death": Decimal("0.20"),
            "Permanent Disability": Decimal("0.10"),
        },
        InsuranceCategory.RESIDENTIAL: {
            "Fire": Decimal("0.50"),
            "Flood": Decimal("0.30"),
            "Electrical Damage": Decimal("0.20"),
        },
        InsuranceCategory.TRAVEL: {
            "Medical Expenses": Decimal("0.70"),
            "Lost Luggage": Decimal("0.10"),
            "Trip Cancellation": Decimal("0.20"),
        },
        InsuranceCategory.HEALTH: {
            "Hospitalization": Decimal("0.60"),
            "Outpatient": Decimal("0.25"),
            "Dental": Decimal("0.15"),
        },
    }

    ASSISTANCES = {
        InsuranceCategory.AUTO: ["Towing", "Glass Replacement", "Spare Car"],
        InsuranceCategory.LIFE: ["Funeral Assistance", "Psychological Support"],
        InsuranceCategory.RESIDENTIAL: ["Plumber", "Locksmith", "Electrician"],
        InsuranceCategory.TRAVEL: ["Medical Hotline", "Document Replacement"],
        InsuranceCategory.HEALTH: ["Telemedicine", "Second Opinion"],
    }

    # Monthly premium as a fraction of the insured amount
    PREMIUM_RATE = (0.0005, 0.002)

    def generate(
        self,
        customer_id: str | None = None,
        category: InsuranceCategory | None = None,
        insured_amount: Decimal | None = None,
    ) -> PolicyRequest:
        """Generate a policy request in RECEIVED status.

        Parameters
        ----------
        customer_id : str | None
            Owning customer (random UUID when omitted).
        category : InsuranceCategory | None
            Insurance category (random when omitted).
        insured_amount : Decimal | None
            Insured amount (10k to 1.2M in thousands when omitted).

        Returns
        -------
        PolicyRequest
            Generated request, not yet persisted.
        """
        category = category or self.random.choice(list(InsuranceCategory))
        if insured_amount is None:
            insured_amount = Decimal(self.random.randint(10, 1200) * 1000)
        insured_amount = Decimal(str(insured_amount))

        rate = Decimal(str(round(self.random.uniform(*self.PREMIUM_RATE), 5)))
        premium = (insured_amount * rate).quantize(CENTS, rounding=ROUND_HALF_UP)

        coverages = {
            name: (insured_amount * share).quantize(CENTS, rounding=ROUND_HALF_UP)
            for name, share in self.COVERAGES[category].items()
        }
        options = self.ASSISTANCES[category]
        assistances = self.random.sample(options, self.random.randint(1, len(options)))

        return PolicyRequest(
            customer_id=customer_id or self.fake.uuid4(),
            product_id=f"{category.value[:3]}-{self.random.randint(100, 999)}",
            category=category,
            sales_channel=self.random.choice(list(SalesChannel)),
            payment_method=self.random.choice(list(PaymentMethod)),
            total_monthly_premium_amount=premium,
            insured_amount=insured_amount,
            coverages=coverages,
            assistances=assistances,
            policy_request_id=self.fake.uuid4(),
        )

    def generate_batch(self, count: int, customers: int | None = None) -> Iterator[PolicyRequest]:
        """Generate ``count`` requests spread over ``customers`` customers.

        Parameters
        ----------
        count : int
            Number of requests.
        customers : int | None
            Size of the customer pool; one customer per request when omitted.

        Yields
        ------
        PolicyRequest
            Generated requests.
        """
        pool = [self.fake.uuid4() for _ in range(customers)] if customers else None
        for _ in range(count):
            customer_id = self.random.choice(pool) if pool else None
            yield self.generate(customer_id=customer_id)
