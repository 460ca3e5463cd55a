from dataclasses import replace
from typing import Iterable, List, Optional

from ...port.user_store import UserStore
from ...domain.entity.user_entity import UserEntity


class InMemoryUserStore(UserStore):
    """
    プロセス内のリストを用いた UserStore の実装

    呼び出し側での変更が保存前に反映されないよう、読み書きともにコピーを扱う。
    """
    def __init__(self, users: Optional[Iterable[UserEntity]] = None):
        self._users: List[UserEntity] = [replace(user) for user in users or []]

    def load(self) -> List[UserEntity]:
        return [replace(user) for user in self._users]

    def save(self, users: List[UserEntity]) -> None:
        self._users = [replace(user) for user in users]
