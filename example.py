"""Example usage of the textrecords library."""

from pathlib import Path

from textrecords import Schema

# Define the record type using the DSL
types = """
Person {
    name: string
    id: integer
    active: bool = true
}
"""

data_file = Path("./example_people.txt")

schema = Schema.parse(types)

with schema.open_store("Person", data_file) as store:
    # Add several people
    store.insert("Albert Einstein", 100)
    store.insert("George Washington", 200)
    store.insert("Takahashi Ohmura", 100)
    store.insert("Grace Hopper", 100, False)

    print(f"Stored {len(store)} people")

    # Queries by field name, or through the per-field shortcuts
    print("First with id 100:", store.find("id", 100))
    print("All with id 100:", store.find_by_id(100, limit=0))
    print("Inactive:", store.find_all_by_active(False))
    print("Has id 300?", store.has_id(300))

    # Updates change at most `limit` matches; 0 means all
    store.update("id", 100, 101, limit=2)
    store.update_where("active", True, lambda p: p.name == "Grace Hopper")

    # Removal
    removed = store.remove_all_by_id(200)
    print(f"Removed {removed} record(s)")

    store.dump()
    store.save(data_file)

print(f"Wrote {data_file}")
print(data_file.read_text())
