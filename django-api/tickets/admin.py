from django.contrib import admin

from tickets.models import Buyer, Concert, Order, OrderAddon


class ReadOnlyAdminMixin:
    """Orders and add-ons are written only by the purchase service."""

    def has_add_permission(self, request, obj=None) -> bool:
        return False

    def has_change_permission(self, request, obj=None) -> bool:
        return False

    def has_delete_permission(self, request, obj=None) -> bool:
        return False


class OrderAddonInline(ReadOnlyAdminMixin, admin.TabularInline):
    model = OrderAddon
    fields = ["position", "item_name"]
    extra = 0


@admin.register(Concert)
class ConcertAdmin(admin.ModelAdmin):
    list_display = ["name", "artist", "venue", "date", "price", "stock"]
    search_fields = ["name", "artist", "venue"]

    def get_readonly_fields(self, request, obj=None):
        # Stock only moves through purchases once a concert exists.
        if obj is not None:
            return ["stock"]
        return []


@admin.register(Order)
class OrderAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ["id", "buyer", "concert", "quantity", "total_price", "created_at"]
    list_filter = ["concert"]
    inlines = [OrderAddonInline]


@admin.register(Buyer)
class BuyerAdmin(admin.ModelAdmin):
    list_display = ["handle", "role", "created_at"]
    search_fields = ["handle"]
    exclude = ["password_hash"]
