"""Мини‑реестры для юнит‑тестов."""

# общий дед Max по отцовской и материнской линии
litter = [
    {"Name": "Pup", "Sire": "Rex", "Dam": "Bella", "Sex": "Dog"},
    {"Name": "Rex", "Sire": "Max", "Dam": "Luna", "Sex": "Dog"},
    {"Name": "Bella", "Sire": "Max", "Dam": "Daisy", "Sex": "Bitch"},
    {"Name": "Max", "Sex": "Dog"},
    {"Name": "Luna", "Sex": "Bitch"},
    {"Name": "Daisy", "Sex": "Bitch"},
]

# две неродственные линии: у X 3 предка, у Y 4
unrelated = [
    {"Name": "X", "Sire": "X1", "Dam": "X2"},
    {"Name": "X1", "Sire": "X3"},
    {"Name": "X2"},
    {"Name": "X3"},
    {"Name": "Y", "Sire": "Y1", "Dam": "Y2"},
    {"Name": "Y1", "Sire": "Y3", "Dam": "Y4"},
    {"Name": "Y2"},
    {"Name": "Y3"},
    {"Name": "Y4"},
]


def full_pedigree(generations: int, root: str = "Root") -> list[dict]:
    """Полностью известная родословная: все предки различны, у основателей родителей нет."""
    records = []

    def _add(name: str, level: int):
        if level == generations - 1:
            records.append({"Name": name})
            return
        records.append({"Name": name, "Sire": f"{name}-S", "Dam": f"{name}-D"})
        _add(f"{name}-S", level + 1)
        _add(f"{name}-D", level + 1)

    _add(root, 0)
    return records
