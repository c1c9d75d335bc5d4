# routers/payments.py

from models.payment import PaymentCreate, PaymentRead, PaymentUpdate
from repositories.payment_repo import PaymentRepository
from routers.crud import property_scoped_router


router = property_scoped_router(
    prefix="/payments",
    tag="Payments",
    repo_cls=PaymentRepository,
    create_model=PaymentCreate,
    update_model=PaymentUpdate,
    read_model=PaymentRead,
)
