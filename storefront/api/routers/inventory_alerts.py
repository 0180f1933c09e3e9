# storefront/api/routers/inventory_alerts.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_token, require_seller
from storefront.data.database import get_db
from storefront.domain.schemas import InventoryAlertIn, InventoryAlertOut, InventoryAlertSummary, MessageOut
from storefront.services.inventory_alert_service import InventoryAlertService

router = APIRouter(prefix="/inventory-alerts", tags=["inventory-alerts"])


def get_service(db: Session):
    return InventoryAlertService(db)


@router.post("/", response_model=InventoryAlertOut, status_code=201)
def create_alert(payload: InventoryAlertIn, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return InventoryAlertOut.from_alert(get_service(db).create_alert(token, payload))


@router.get("/", response_model=List[InventoryAlertOut])
def get_alerts(token: str = Depends(get_token), db: Session = Depends(get_db)):
    return [InventoryAlertOut.from_alert(a) for a in get_service(db).get_alerts(token)]


@router.get("/enabled", response_model=List[InventoryAlertOut])
def get_enabled_alerts(token: str = Depends(get_token), db: Session = Depends(get_db)):
    return [InventoryAlertOut.from_alert(a) for a in get_service(db).get_enabled_alerts(token)]


@router.get("/triggered", response_model=List[InventoryAlertSummary])
def get_triggered_alerts(token: str = Depends(get_token), db: Session = Depends(get_db)):
    return [InventoryAlertSummary.from_alert(a) for a in get_service(db).get_triggered_alerts(token)]


@router.get("/triggered/all", response_model=List[InventoryAlertSummary], dependencies=[Depends(require_seller)])
def get_all_triggered_alerts(db: Session = Depends(get_db)):
    return [InventoryAlertSummary.from_alert(a) for a in get_service(db).get_all_triggered_alerts()]


@router.get("/product/{product_id}", response_model=InventoryAlertOut)
def get_alert_for_product(product_id: int, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return InventoryAlertOut.from_alert(get_service(db).get_alert_for_product(token, product_id))


@router.get("/{alert_id}", response_model=InventoryAlertOut)
def get_alert(alert_id: int, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return InventoryAlertOut.from_alert(get_service(db).get_alert(token, alert_id))


@router.put("/{alert_id}", response_model=InventoryAlertOut)
def update_alert(
    alert_id: int,
    payload: InventoryAlertIn,
    token: str = Depends(get_token),
    db: Session = Depends(get_db),
):
    return InventoryAlertOut.from_alert(get_service(db).update_alert(token, alert_id, payload))


@router.patch("/{alert_id}/toggle", response_model=InventoryAlertOut)
def toggle_alert(
    alert_id: int,
    enabled: bool = Query(...),
    token: str = Depends(get_token),
    db: Session = Depends(get_db),
):
    return InventoryAlertOut.from_alert(get_service(db).toggle_alert(token, alert_id, enabled))


@router.delete("/{alert_id}", response_model=MessageOut)
def delete_alert(alert_id: int, token: str = Depends(get_token), db: Session = Depends(get_db)):
    return get_service(db).delete_alert(token, alert_id)
