ROWS_KEY = "rows"
COLS_KEY = "cols"

class ElementColumn:
    ROW = "row"
    COL = "col"
    VALUE = "value"

class Operation:
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"

# menu codes accepted in place of the operation names
OPERATION_CODES = {
    "i": Operation.ADD,
    "ii": Operation.SUBTRACT,
    "iii": Operation.MULTIPLY,
}
