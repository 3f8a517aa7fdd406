from table_orm import Engine

orm = Engine.open("test.db")

# Define our table
Student = orm.table("student", "id INTEGER PRIMARY KEY, name TEXT, year INTEGER, major TEXT")

# Build and save our rows
Student({"id": 901, "name": "Lawson Milwood", "year": 2024, "major": "Straight Science"}).save()

lawson = Student().where("id = 901").first()
print(lawson)

orm.close()
