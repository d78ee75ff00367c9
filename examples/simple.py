from __future__ import annotations

from dataclasses import dataclass

from shapechain import Action, Effect, Producer, Transformer


@dataclass(frozen=True)
class Address:
    city: str


@dataclass(frozen=True)
class User:
    name: str
    address: Address | None = None


USERS = {
    "ada": User("Ada", Address("London")),
    "alan": User("Alan"),
}


def find_user(user_id: str) -> User | None:
    return USERS.get(user_id)


def city_of(user: User) -> str:
    # Raises AttributeError when the user or the address is missing
    return user.address.city


def build_city_lookup(audit: list[str]) -> Transformer[str, str]:
    record = Effect(lambda user_id: audit.append(f"lookup {user_id}"))
    return (
        record
        .and_(Transformer(find_user))
        .and_(Transformer(city_of))
        .and_(Transformer(str.upper))
        .with_default("UNKNOWN")
    )


def run_report(user_ids: list[str]) -> list[str]:
    audit: list[str] = []
    lookup = build_city_lookup(audit)
    cities = [lookup(user_id) for user_id in user_ids]

    announce = Action(lambda: audit.append("report done"))
    summary = announce.and_(Producer(lambda: ", ".join(cities)))
    return [summary(), *audit]


if __name__ == "__main__":
    for line in run_report(["ada", "alan", "grace"]):
        print(line)
