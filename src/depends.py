from fastapi import BackgroundTasks, Depends
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.repositories import (
    SqlAlchemyConversationRepository,
    SqlAlchemyCreditAccountRepository,
    SqlAlchemyCreditTransactionRepository,
    SqlAlchemyTenantRepository,
    SqlAlchemyUsageDebitRepository,
)
from src.adapter.services.compute_resume_service import create_resume_service
from src.adapter.services.stripe_gateway import StripePaymentGateway
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.compute_resume_service import ComputeResumeService
from src.app.services.payment_gateway import PaymentGateway
from src.app.use_cases.billing import (
    AdjustCredits,
    AdminAdjustCredits,
    GetBalance,
    GetBillingLedger,
    HandleCheckoutWebhook,
    StartCheckout,
)
from src.domain.billing_policy import BillingPolicy

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

billing_policy = BillingPolicy.from_config(ApplicationConfig)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work(session: AsyncSession = Depends(get_session)):
    async with SqlAlchemyUnitOfWork(session) as uow:
        yield uow


def get_billing_policy() -> BillingPolicy:
    return billing_policy


def get_payment_gateway() -> PaymentGateway:
    return StripePaymentGateway(
        secret_key=ApplicationConfig.STRIPE_SECRET_KEY,
        webhook_secret=ApplicationConfig.STRIPE_WEBHOOK_SECRET,
    )


def get_resume_service() -> ComputeResumeService:
    return create_resume_service(
        ApplicationConfig.RESUME_SERVICE_URL,
        token=ApplicationConfig.RESUME_SERVICE_TOKEN,
        timeout=ApplicationConfig.RESUME_TIMEOUT_SECONDS,
    )


def get_adjust_credits(
    session: AsyncSession = Depends(get_session),
    uow: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
) -> AdjustCredits:
    return AdjustCredits(
        uow,
        SqlAlchemyCreditAccountRepository(session),
        SqlAlchemyCreditTransactionRepository(session),
    )


def get_get_balance(
    session: AsyncSession = Depends(get_session),
    policy: BillingPolicy = Depends(get_billing_policy),
) -> GetBalance:
    return GetBalance(SqlAlchemyCreditAccountRepository(session), policy)


def get_billing_ledger(
    session: AsyncSession = Depends(get_session),
    policy: BillingPolicy = Depends(get_billing_policy),
) -> GetBillingLedger:
    return GetBillingLedger(
        SqlAlchemyCreditAccountRepository(session),
        SqlAlchemyCreditTransactionRepository(session),
        SqlAlchemyUsageDebitRepository(session),
        SqlAlchemyConversationRepository(session),
        policy,
    )


def get_start_checkout(
    session: AsyncSession = Depends(get_session),
    uow: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    policy: BillingPolicy = Depends(get_billing_policy),
) -> StartCheckout:
    return StartCheckout(
        uow,
        SqlAlchemyTenantRepository(session),
        gateway,
        policy,
        app_base_url=ApplicationConfig.APP_BASE_URL,
    )


def get_handle_checkout_webhook(
    background_tasks: BackgroundTasks,
    gateway: PaymentGateway = Depends(get_payment_gateway),
    adjust_credits: AdjustCredits = Depends(get_adjust_credits),
    resume_service: ComputeResumeService = Depends(get_resume_service),
) -> HandleCheckoutWebhook:
    return HandleCheckoutWebhook(
        gateway,
        adjust_credits,
        resume_service=resume_service if ApplicationConfig.RESUME_ON_PURCHASE else None,
        schedule=background_tasks.add_task,
    )


def get_admin_adjust_credits(
    session: AsyncSession = Depends(get_session),
    adjust_credits: AdjustCredits = Depends(get_adjust_credits),
) -> AdminAdjustCredits:
    return AdminAdjustCredits(SqlAlchemyTenantRepository(session), adjust_credits)
