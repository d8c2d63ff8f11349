"""Check for and display the required products for a given coupon code."""

from django.core.management import BaseCommand, CommandError
from rich import box
from rich.console import Console
from rich.table import Table

from coupons.messages import message_for_outcome
from coupons.models import Basket, Coupon, Product
from coupons.required_products import evaluate


class Command(BaseCommand):
    """Check for and display the required products for a given coupon code."""

    def add_arguments(self, parser):
        """Add arguments to the command."""

        parser.add_argument(
            "code",
            type=str,
            help="The coupon code to check.",
        )
        parser.add_argument(
            "--basket",
            type=int,
            help="ID of a basket to check the coupon against.",
        )

    def handle(self, *args, **kwargs):  # noqa: ARG002
        """Get and display the coupon's required products."""

        code = kwargs.pop("code", None)
        basket_id = kwargs.pop("basket", None)

        if not code:
            msg = "Must have a code to check."
            raise CommandError(msg)

        try:
            coupon = Coupon.objects.get(coupon_code=code)
        except Coupon.DoesNotExist as exc:
            msg = f"Coupon {code} not found."
            raise CommandError(msg) from exc

        spec = coupon.requirement

        self.stdout.write(f"Coupon code {coupon.coupon_code}")
        self.stdout.write(f"Kind: {coupon.friendly_format()} {coupon.discount_type}")

        if spec is None:
            self.stdout.write("Required products: malformed configuration")
        elif spec.is_empty:
            self.stdout.write("Required products: none")
        else:
            self.stdout.write(
                f"Required products format: {spec.source_format} {spec.version or ''}".rstrip()
            )
            if not spec.is_supported_version:
                self.stdout.write(
                    f"Unsupported version {spec.version} - this coupon can't be redeemed."
                )

        console = Console(file=self.stdout)

        if spec is not None and not spec.is_empty:
            descriptions = {
                product.id: str(product.description)
                for product in Product.all_objects.filter(
                    id__in=spec.required_products.keys()
                )
            }

            table = Table(title="Required Products", box=box.MINIMAL)
            table.add_column("#", overflow="fold")
            table.add_column("Desc", overflow="fold")
            table.add_column("Quantity")

            for product_id, quantity in sorted(spec.required_products.items()):
                table.add_row(
                    str(product_id),
                    descriptions.get(product_id, "(no such product)"),
                    str(quantity),
                )

            console.print(table)

        if basket_id is None:
            return

        try:
            basket = Basket.objects.get(id=basket_id)
        except Basket.DoesNotExist as exc:
            msg = f"Basket {basket_id} not found."
            raise CommandError(msg) from exc

        outcome = evaluate(coupon.required_products, basket.get_cart_contents())

        if outcome.is_valid:
            self.stdout.write(f"Basket {basket.id}: coupon can be applied.")
            return

        self.stdout.write(
            f"Basket {basket.id}: {message_for_outcome(outcome)} ({outcome.reason})"
        )

        if len(outcome.missing_products) > 0:
            table = Table(title="Missing Products", box=box.MINIMAL)
            table.add_column("#", overflow="fold")
            table.add_column("Required")
            table.add_column("In basket")

            cart = basket.get_cart_contents()
            for product_id, quantity in sorted(outcome.missing_products.items()):
                table.add_row(
                    str(product_id), str(quantity), str(cart.get(product_id, 0))
                )

            console.print(table)
