from benchbro import Case

from jsonexec import DocumentContext, compile_path

DOCUMENT = (
    '{"store":{"book":['
    + ",".join(
        f'{{"id":{i},"title":"Book {i}","price":{i * 1.5}}}' for i in range(200)
    )
    + ']}}'
)
TITLE_PATH = compile_path("$.store.book[150].title")
FILTER_PATH = compile_path("$.store.book[?(@.price > 100)].title")

evaluate_case = Case(
    name="evaluate",
    case_type="cpu",
    metric_type="time",
    tags=["jsonexec", "evaluate"],
    warmup_iterations=5,
    min_iterations=50,
    repeats=10,
)

set_case = Case(
    name="set",
    case_type="cpu",
    metric_type="time",
    tags=["jsonexec", "set"],
    warmup_iterations=5,
    min_iterations=50,
    repeats=10,
)


@evaluate_case.benchmark()
def definite_path():
    DocumentContext.parse(DOCUMENT).evaluate(TITLE_PATH)


@evaluate_case.benchmark()
def filter_path():
    DocumentContext.parse(DOCUMENT).evaluate(FILTER_PATH)


@evaluate_case.benchmark()
def compile_dynamic_path():
    compile_path("$.store.book[?(@.price > 100)].title")


@set_case.benchmark()
def put_strategy():
    context = DocumentContext.parse(DOCUMENT, write_strategy="put")
    context.set(TITLE_PATH, "X")
    context.serialize()


@set_case.benchmark()
def direct_strategy():
    context = DocumentContext.parse(DOCUMENT, write_strategy="direct")
    context.set(TITLE_PATH, "X")
    context.serialize()
