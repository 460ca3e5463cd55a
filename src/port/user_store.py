from typing import List, Protocol

from ..domain.entity.user_entity import UserEntity


class UserStore(Protocol):
    """
    ユーザーデータの永続化インターフェース。

    全件を読み込み、全件を書き戻す単純な契約。呼び出しはブロッキングで、
    失敗時は StoreError を送出する。
    """

    def load(self) -> List[UserEntity]:
        ...

    def save(self, users: List[UserEntity]) -> None:
        ...
