from dataclasses import dataclass

@dataclass
class UserEntity:
    """
    アカウントのビジネスドメインモデル

    user_id と password は作成後に変更されない。
    nickname と comment のみがプロフィール更新で変更される。
    """
    user_id: str
    password: str
    nickname: str = ""
    comment: str = ""

    def __post_init__(self):
        if not self.nickname:
            self.nickname = self.user_id

    def matches_credentials(self, user_id: str, password: str) -> bool:
        return self.user_id == user_id and self.password == password

    def change_nickname(self, nickname: str) -> None:
        """空文字列が渡された場合は user_id に戻す"""
        self.nickname = nickname if nickname else self.user_id

    def change_comment(self, comment: str) -> None:
        self.comment = comment if comment else ""
