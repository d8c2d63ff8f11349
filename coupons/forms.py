from django import forms
from django.db.models import Q
from django.utils.translation import gettext_lazy as _

from coupons.models import Coupon, Product
from coupons.required_products import requirement_product_ids


class CouponAdminForm(forms.ModelForm):
    """
    Coupon form for the admin. Required products are picked from the active
    products and saved in the versioned format, each required once.

    The stored value is only rewritten when the selection changes, so editing
    other fields keeps a restriction that can't be shown here (malformed data
    or an unsupported version) in place.
    """

    required_product_choices = forms.ModelMultipleChoiceField(
        queryset=Product.objects.all(),
        required=False,
        label=_("Required products"),
        help_text=_("Select products that are required for this coupon."),
    )

    class Meta:
        model = Coupon
        fields = ["coupon_code", "amount", "discount_type"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        if self.instance.pk and "required_product_choices" not in self.initial:
            self.initial["required_product_choices"] = requirement_product_ids(
                self.instance.required_products
            )

        # products that were deactivated after being required stay selectable,
        # ids with no product at all are left out of the initial selection
        required_ids = self.initial.get("required_product_choices") or []
        if required_ids:
            self.initial["required_product_choices"] = sorted(
                Product.all_objects.filter(id__in=required_ids).values_list(
                    "id", flat=True
                )
            )
            self.fields["required_product_choices"].queryset = (
                Product.all_objects.filter(Q(is_active=True) | Q(id__in=required_ids))
            )

    def save(self, commit=True):  # noqa: FBT002
        if "required_product_choices" in self.changed_data:
            self.instance.set_required_products(
                self.cleaned_data.get("required_product_choices") or []
            )

        return super().save(commit=commit)
