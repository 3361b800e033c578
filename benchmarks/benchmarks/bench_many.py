from pychomp.Char import chomp_if, chomp_while, spaces
from pychomp.Combinators import Trailing, sequence
from pychomp.Number import integer
from pychomp.Parser import Token
from pychomp.Prim import Done, Loop, get_chomped_string, loop, one_of, run, succeed


def _count_a(count):
    return one_of([
        chomp_if(lambda c: c == "a", "a").map(lambda _: Loop(count + 1)),
        succeed(Done(count)),
    ])


class TimeChompWhile:
    def setup(self):
        self.parser = get_chomped_string(chomp_while(lambda c: c == "a"))
        self.small = "a" * 1000
        self.medium = "a" * 10000
        self.large = "a" * 100000

    def time_chomp_while_small(self):
        run(self.parser, self.small)

    def time_chomp_while_medium(self):
        run(self.parser, self.medium)

    def time_chomp_while_large(self):
        run(self.parser, self.large)


class TimeLoop:
    def setup(self):
        self.parser = loop(0, _count_a)
        self.medium = "a" * 10000
        self.wide = "\U0001F600" * 10000 + "a" * 10000

    def time_loop_medium(self):
        run(self.parser, self.medium)

    def time_chomp_while_wide(self):
        run(chomp_while(lambda c: c != "a"), self.wide)


class TimeSequence:
    def setup(self):
        self.parser = sequence(
            start=Token("[", "["),
            separator=Token(",", ","),
            end=Token("]", "]"),
            spaces=spaces(),
            item=integer("int", "invalid"),
            trailing=Trailing.FORBIDDEN,
        )
        self.text = "[" + ", ".join(str(n) for n in range(10000)) + "]"

    def time_sequence(self):
        run(self.parser, self.text)
