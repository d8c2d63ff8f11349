import random

import faker
from django.conf import settings
from factory import Faker, Sequence, SubFactory, fuzzy
from factory.django import DjangoModelFactory

from coupons import models
from coupons.constants import ALL_DISCOUNT_TYPES

FAKE = faker.Factory.create()


class UserFactory(DjangoModelFactory):
    username = Sequence(lambda n: f"user{n}")
    email = Faker("email")

    class Meta:
        model = settings.AUTH_USER_MODEL


class ProductFactory(DjangoModelFactory):
    price = fuzzy.FuzzyDecimal(1, 2000, precision=2)
    description = FAKE.sentence(nb_words=4)
    is_active = True

    class Meta:
        model = models.Product


class CouponFactory(DjangoModelFactory):
    amount = random.randrange(1, 50, 1)  # noqa: S311
    discount_type = fuzzy.FuzzyChoice(ALL_DISCOUNT_TYPES)
    coupon_code = fuzzy.FuzzyText(length=20)
    required_products = None

    class Meta:
        model = models.Coupon


class BasketFactory(DjangoModelFactory):
    """Factory for Basket"""

    user = SubFactory(UserFactory)

    class Meta:
        model = models.Basket


class BasketItemFactory(DjangoModelFactory):
    """Factory for BasketItem"""

    product = SubFactory(ProductFactory)
    basket = SubFactory(BasketFactory)
    quantity = 1

    class Meta:
        model = models.BasketItem
