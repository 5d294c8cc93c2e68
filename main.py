from rich.pretty import pprint

from argsmith import *

parser = ArgParser("", "Say hello.", version=__version__, shell=True)
parser.add_flag("v", "verbose", "chatty output")
parser.add_option("n", "name", "who to greet", "world")
parser.add_positional("message", "what to say", True)


if __name__ == '__main__':
    parser.parse_options()
    pprint(parser)
