from django.apps import AppConfig


class OrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.orders"
    label = "orders"

    def ready(self) -> None:
        from modules.orders.events import PurchaseCompleted
        from modules.orders.handlers import purchase_completed_handler
        from shared.infrastructure.bus import event_bus

        event_bus.subscribe(PurchaseCompleted, purchase_completed_handler)
