from pathlib import Path
from typing import List

from peewee import SqliteDatabase, PeeweeException, SQL, chunked

from ...port.user_store import UserStore
from ...domain.entity.user_entity import UserEntity
from ...domain.exception.user_exceptions import StoreError
from .peewee_models import User as UserModel, db_proxy


class SqliteUserStore(UserStore):
    """
    Peewee/SQLite を用いた UserStore の実装

    save は全件の置き換えを1トランザクションで行う。
    """
    def __init__(self, db_path: str = "./data/accounts.db"):
        self.db_path = Path(db_path)
        # データベースディレクトリが存在しない場合は作成
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self.db = SqliteDatabase(str(self.db_path))
        db_proxy.initialize(self.db)
        self.db.create_tables([UserModel], safe=True)

    def load(self) -> List[UserEntity]:
        try:
            return [
                UserEntity(
                    user_id=row.user_id,
                    password=row.password,
                    nickname=row.nickname,
                    comment=row.comment,
                )
                for row in UserModel.select().order_by(SQL("rowid"))
            ]
        except PeeweeException as e:
            raise StoreError(f"Failed to load users from {self.db_path}: {e}") from e

    def save(self, users: List[UserEntity]) -> None:
        rows = [
            {
                "user_id": user.user_id,
                "password": user.password,
                "nickname": user.nickname,
                "comment": user.comment,
            }
            for user in users
        ]
        try:
            with self.db.atomic():
                UserModel.delete().execute()
                for batch in chunked(rows, 100):
                    UserModel.insert_many(batch).execute()
        except PeeweeException as e:
            raise StoreError(f"Failed to save users to {self.db_path}: {e}") from e

    def close(self) -> None:
        if not self.db.is_closed():
            self.db.close()
