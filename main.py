from argosy import *


compiler = Cell("")
number = Cell(0)
op = Cell(2)
strings = Cell([])

parser = (
    Parser("description")
    ("compiler", compiler, help="compiler to drive")
    ("int", number)
    ("-op", op, help="optimization level")
    .add("-strings", strings, count=Arity.AT_LEAST_ONE, metavar="string", combiner=append)
)


if __name__ == '__main__':
    if parser.parse_args():
        print(compiler.value, number.value, op.value)
        for string in strings.value:
            print(string)
