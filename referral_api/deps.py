from typing import Annotated, AsyncGenerator
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from .infrastructure.mailer import Mailer


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency to get database session from the factory built at startup"""
    async with request.app.state.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_mailer(request: Request) -> Mailer:
    """Dependency returning the process-wide mail transport"""
    return request.app.state.mailer


# Type aliases for dependency injection
SessionDep = Annotated[AsyncSession, Depends(get_session)]
MailerDep = Annotated[Mailer, Depends(get_mailer)]
