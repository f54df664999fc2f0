# cartografia/create_editor.py
"""
Cria o primeiro editor (o /register exige um editor logado).

Uso: python -m cartografia.create_editor <username> [--email EMAIL]
A senha é pedida no terminal, nunca vai para o código.
"""
import argparse
import asyncio
import getpass
import logging
import sys

from sqlalchemy import select

from cartografia.core.database import AsyncSessionLocal
from cartografia.core.security import get_password_hash
from cartografia.models.user import User

logger = logging.getLogger(__name__)

async def create_editor(username: str, password: str, email: str = None) -> bool:
    async with AsyncSessionLocal() as db:
        result = await db.execute(select(User).where(User.username == username))
        if result.scalars().first():
            logger.warning(f"Usuário {username} já existe.")
            return False

        db.add(User(username=username, email=email, hashed_password=get_password_hash(password)))
        await db.commit()
        logger.info(f"✅ Editor {username} criado.")
        return True

def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO)
    parser = argparse.ArgumentParser(description="Cria um editor da Cartografía Social")
    parser.add_argument("username")
    parser.add_argument("--email", default=None)
    args = parser.parse_args(argv)

    password = getpass.getpass("Senha: ")
    if len(password) < 8:
        print("A senha precisa de pelo menos 8 caracteres.", file=sys.stderr)
        return 1

    created = asyncio.run(create_editor(args.username, password, args.email))
    return 0 if created else 1

if __name__ == "__main__":
    sys.exit(main())
