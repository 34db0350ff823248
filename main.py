import asyncio
import logging
import sys
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from typing import Optional

from config import Config, config
from domain.result import Failure
from managers.auth_manager import AuthManager
from managers.back_office_manager import BackOfficeManager
from managers.menu_manager import MenuManager
from managers.order_manager import OrderManager
from managers.user_manager import UserManager
from repositories.auth_repository import AuthRepository
from repositories.inventory_repository import InventoryRepository
from repositories.menu_repository import MenuRepository
from repositories.order_repository import OrderRepository
from repositories.review_repository import ReviewRepository
from repositories.supplier_repository import SupplierRepository
from repositories.user_repository import UserRepository
from services.api_client import ApiClient
from services.inflight import InFlightGuard
from services.storage import KeyValueStore, SessionStore, init_store
from view_models.kitchen import KitchenViewModel
from view_models.menu import MenuViewModel
from view_models.waiter_order import WaiterOrderViewModel

logger = logging.getLogger(__name__)


def configure_logging(cfg: Config) -> None:
    """Логи в stdout и в файл с ротацией (10 MB x 5)."""
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    log_level = logging.DEBUG if cfg.DEBUG else getattr(logging, cfg.LOG_LEVEL, logging.INFO)
    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[
            logging.StreamHandler(sys.stdout),
            RotatingFileHandler(
                cfg.LOG_FILE,
                maxBytes=10*1024*1024,  # 10 MB
                backupCount=5,
                encoding='utf-8'
            )
        ]
    )
    # aiohttp слишком многословен на DEBUG
    logging.getLogger("aiohttp").setLevel(logging.WARNING)


def setup_asyncio_exception_logging() -> None:
    """
    Ловит исключения из "фоновых" задач asyncio (Task exception was never retrieved).
    """
    loop = asyncio.get_running_loop()

    def _handler(loop: asyncio.AbstractEventLoop, context: dict):
        msg = context.get("message", "asyncio exception")
        exc = context.get("exception")
        logger.error("ASYNCIO %s", msg, exc_info=exc)

    loop.set_exception_handler(_handler)


@dataclass
class App:
    """Собранные зависимости. Все связи передаются через конструкторы."""
    config: Config
    api: ApiClient
    session_store: SessionStore
    auth: AuthManager
    menu: MenuManager
    orders: OrderManager
    users: UserManager
    back_office: BackOfficeManager

    def waiter_screen(self) -> WaiterOrderViewModel:
        return WaiterOrderViewModel(self.menu, self.orders, tax_rate=self.config.TAX_RATE)

    def kitchen_screen(self) -> KitchenViewModel:
        role = self.auth.current_user.role if self.auth.current_user else None
        return KitchenViewModel(self.orders, actor_role=role)

    def menu_screen(self) -> MenuViewModel:
        return MenuViewModel(self.menu)


def build_app(cfg: Config, store: KeyValueStore, api: Optional[ApiClient] = None) -> App:
    api = api or ApiClient.from_config(cfg)
    session_store = SessionStore(store)
    return App(
        config=cfg,
        api=api,
        session_store=session_store,
        auth=AuthManager.from_repository(AuthRepository(api, session_store)),
        menu=MenuManager.from_repository(MenuRepository(api)),
        orders=OrderManager.from_repository(OrderRepository(api), InFlightGuard()),
        users=UserManager.from_repository(UserRepository(api)),
        back_office=BackOfficeManager(
            SupplierRepository(api),
            ReviewRepository(api),
            InventoryRepository(api),
        ),
    )


async def run(app: App) -> int:
    """Восстановить или открыть сессию и вывести сводку смены."""
    if isinstance(await app.auth.initialize(), Failure):
        if not (app.config.STAFF_EMAIL and app.config.STAFF_PASSWORD):
            logger.error("No stored session and STAFF_EMAIL/STAFF_PASSWORD are not set")
            return 1
        login = await app.auth.login(app.config.STAFF_EMAIL, app.config.STAFF_PASSWORD)
        if isinstance(login, Failure):
            logger.error("Login failed: %s", login.message)
            return 1

    user = app.auth.current_user
    token = app.auth.token or ""
    logger.info("Signed in as %s (%s)", user.name, user.role.value)

    menu = await app.menu.get_all_menu_items(token)
    if isinstance(menu, Failure):
        logger.error("%s", menu.message)
        return 1
    logger.info("Menu: %s items, %s available", len(menu.value), sum(1 for i in menu.value if i.availability))

    kitchen = app.kitchen_screen()
    if isinstance(await kitchen.load_orders(token), Failure):
        logger.error("%s", kitchen.error)
        return 1
    logger.info(
        "Kitchen queue: %s confirmed, %s preparing",
        len(kitchen.confirmed_orders), len(kitchen.preparing_orders),
    )
    kitchen.dispose()

    stats = await app.orders.get_order_stats(token)
    if isinstance(stats, Failure):
        # Статистика доступна не всем ролям
        logger.warning("%s", stats.message)
    else:
        logger.info(
            "Today: %s orders, earnings %.2f, avg %.2f",
            stats.value.today_order_count, stats.value.daily_earnings, stats.value.avg_order_value,
        )
    return 0


async def main() -> int:
    configure_logging(config)
    setup_asyncio_exception_logging()
    store = await init_store(config)
    app = build_app(config, store)
    logger.info("Starting staff client against %s", config.API_BASE_URL)
    return await run(app)


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Stopped by user")
