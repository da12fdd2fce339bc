# app/services/inventory_service.py
from sqlalchemy.orm import Session

from app.domain.errors import InsufficientStock, NotFoundError, Unavailable, ValidationError
from app.domain.schemas import ResourceKind
from app.repos.catalog_repo import CatalogRepo
from app.repos.inventory_repo import InventoryRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


class InventoryService:
    """
    Rezerwacja i zwalnianie dostepnosci (menu, stoliki, sale).

    Nic tu nie commituje: zmiana wchodzi do transakcji wolajacego, wiec rollback
    po bledzie dalszego kroku cofa tez rezerwacje.
    """

    def __init__(self, db: Session):
        self.repo = InventoryRepo(db)
        self.catalog = CatalogRepo(db)

    def get_resource(self, kind: ResourceKind, resource_id: int):
        if kind == ResourceKind.MENU:
            resource, label = self.catalog.get_menu_item(resource_id), "Pozycja menu"
        elif kind == ResourceKind.TABLE:
            resource, label = self.catalog.get_table(resource_id), "Stolik"
        elif kind == ResourceKind.EVENTHALL:
            resource, label = self.catalog.get_event_hall(resource_id), "Sala"
        else:
            raise ValidationError(f"Nieznany typ pozycji: {kind}")

        if resource is None:
            raise NotFoundError(f"{label} {resource_id} nie istnieje")
        return resource

    def reserve(self, kind: ResourceKind, resource_id: int, amount: int) -> None:
        if amount <= 0:
            raise ValidationError("Ilosc do rezerwacji musi byc wieksza niz 0")

        resource = self.get_resource(kind, resource_id)

        if kind == ResourceKind.MENU:
            if self.repo.decrement_menu_stock(resource_id, amount) == 0:
                logger.warning(f"Brak stanu dla {resource.name}: potrzeba {amount}")
                raise InsufficientStock(
                    f"Niewystarczajacy stan dla {resource.name}. Dostepne: {self._current(resource)}"
                )
        elif kind == ResourceKind.TABLE:
            if self.repo.decrement_table_available(resource_id, amount) == 0:
                logger.warning(f"Stolik {resource.name} niedostepny: potrzeba {amount}")
                raise InsufficientStock(
                    f"Stolik {resource.name} ma za mala dostepnosc. Dostepne: {self._current(resource)}"
                )
        else:
            #sala to jedna jednostka, ilosc > 1 nie ma sensu
            if amount != 1:
                raise ValidationError(f"Sale {resource.name} mozna zarezerwowac tylko w ilosci 1")
            if self.repo.take_event_hall(resource_id) == 0:
                logger.warning(f"Sala {resource.name} niedostepna")
                raise Unavailable(f"Sala {resource.name} jest niedostepna")

        logger.info(f"Zarezerwowano {kind.value}:{resource_id} x{amount}")

    def release(self, kind: ResourceKind, resource_id: int, amount: int) -> None:
        if amount <= 0:
            return

        if kind == ResourceKind.MENU:
            rows = self.repo.increment_menu_stock(resource_id, amount)
        elif kind == ResourceKind.TABLE:
            rows = self.repo.increment_table_available(resource_id, amount)
        elif kind == ResourceKind.EVENTHALL:
            rows = self.repo.free_event_hall(resource_id)
        else:
            raise ValidationError(f"Nieznany typ pozycji: {kind}")

        if rows == 0:
            #pozycja usunieta z katalogu w miedzyczasie, nie ma czego oddawac
            logger.warning(f"Zwolnienie {kind.value}:{resource_id} pominiete, brak w katalogu")
            return

        logger.info(f"Zwolniono {kind.value}:{resource_id} x{amount}")

    def _current(self, resource) -> int:
        #wartosc z bazy, obiekt w sesji moze byc nieaktualny po UPDATE
        self.catalog.db.refresh(resource)
        return resource.stock if hasattr(resource, "stock") else resource.available
