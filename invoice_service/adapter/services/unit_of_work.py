from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession
from invoice_service.app.services.unit_of_work import UnitOfWork
from invoice_service.domain.exceptions import InfrastructureError


class SqlAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(self):
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            raise InfrastructureError("Failed to commit transaction", reason=str(e)) from e

    async def rollback(self):
        try:
            await self.session.rollback()
        except SQLAlchemyError as e:
            raise InfrastructureError("Failed to roll back transaction", reason=str(e)) from e
