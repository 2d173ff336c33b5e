import argparse
import time

import dill
from py_ecc.optimized_bls12_381 import FQ, FQ2

from . import native
from .types import ρ, Witness
from .gadgets import Gadgets


GADGETS = ("sgn0", "mod2")


class StoreKVPairs(argparse.Action):
    def __call__(self, parser, namespace, values, option_string=None):
        result = {}
        for value in values:
            k, _, v = value.rpartition("=")
            result[k] = int(v, 0) % ρ
        setattr(namespace, self.dest, result)


class Timer:
    # This is used to measure the time of a block of code.
    def __init__(self, text):
        self.text = text

    def __enter__(self):
        print(self.text, end=" ", flush=True)
        self.beg = time.time()

    def __exit__(self, *info):
        self.end = time.time()
        print("{:.3f} sec".format(self.end - self.beg))


def build(gadget: str) -> Gadgets:
    # The sgn0 circuit takes the args x.re and x.im, the mod2 circuit takes the arg x, both reveal
    # their result as a public entry named after the gadget.
    circuit = Gadgets()
    if gadget == "sgn0":
        circuit.REVEAL("sgn0", circuit.SGN0(circuit.PARAM_FQ2("x")))
    elif gadget == "mod2":
        circuit.REVEAL("mod2", circuit.MOD2(circuit.PARAM("x")))
    else:
        raise ValueError("unknown gadget: {}".format(gadget))
    return circuit


def evaluate(gadget: str, args: dict[str, int]) -> int:
    # Build the circuit, generate the witness for the given args, check every constraint and return
    # the revealed result.
    with Timer("Building the {} circuit...".format(gadget)):
        circuit = build(gadget)
    print("Dimension of the witness vector:", circuit.wire_count)
    print("Number of constraints:", len(circuit.gates))
    with Timer("Generating witness..."):
        witness = Witness(circuit.funcs, args)
    with Timer("Checking constraints..."):
        witness.check(circuit.gates)
    [index] = (m for m, name in circuit.stmts.items() if name == gadget)
    return witness.vec[index]


def main():
    parser = argparse.ArgumentParser(description="Sign and parity gadgets over the BLS12-381 base field")

    subparsers = parser.add_subparsers(dest="command", required=True, help="sub-command")

    parser_compile = subparsers.add_parser("compile", help="build a gadget circuit", description="Build the circuit of a gadget and write the constraints, witness generation functions, and public entry names to files.")
    parser_compile.add_argument("gadget", type=str, choices=GADGETS, help="the gadget to build")
    parser_compile.add_argument("-g", "--gates", type=str, default="a.gates", help="path to write the constraints to (default: a.gates)")
    parser_compile.add_argument("-f", "--funcs", type=str, default="a.funcs", help="path to write the witness generation functions to (default: a.funcs)")
    parser_compile.add_argument("-n", "--names", type=str, default="a.names", help="path to write the public entry names to (default: a.names)")

    parser_check = subparsers.add_parser("check", help="check a witness", description="Generate the witness for the given arguments and check it against the constraints.")
    parser_check.add_argument("gadget", type=str, nargs="?", choices=GADGETS, help="the gadget to build instead of loading the files")
    parser_check.add_argument("-g", "--gates", type=str, default=None, help="path to read the constraints from")
    parser_check.add_argument("-f", "--funcs", type=str, default=None, help="path to read the witness generation functions from")
    parser_check.add_argument("-n", "--names", type=str, default=None, help="path to read the public entry names from")
    parser_check.add_argument("-a", "--args", action=StoreKVPairs, nargs="*", default={}, help="the arguments to the circuit as key=value pairs")

    parser_sgn0 = subparsers.add_parser("sgn0", help="evaluate sgn0", description="Evaluate sgn0(re + im * u) in the circuit and compare it with the native result.")
    parser_sgn0.add_argument("re", type=lambda v: int(v, 0) % ρ, help="the real part")
    parser_sgn0.add_argument("im", type=lambda v: int(v, 0) % ρ, help="the imaginary part")

    parser_mod2 = subparsers.add_parser("mod2", help="evaluate mod2", description="Evaluate the parity of x in the circuit and compare it with the native result.")
    parser_mod2.add_argument("x", type=lambda v: int(v, 0) % ρ, help="the field element")

    args = parser.parse_args()

    if args.command == "compile":
        with Timer("Building the {} circuit...".format(args.gadget)):
            circuit = build(args.gadget)
        wire_count = circuit.wire_count
        skeys = circuit.stmts.keys()
        gates = circuit.gates
        funcs = circuit.funcs
        names = circuit.stmts.values()

        print("Dimension of the witness vector:", wire_count)
        print("Number of constraints:", len(gates))
        print("Number of public entries:", len(skeys))

        with open(args.gates, "wb") as gates_file:
            print("Saving constraints to:", args.gates)
            gates_file.write(dill.dumps((wire_count, list(skeys), gates)))

        with open(args.funcs, "wb") as funcs_file:
            print("Saving witness generation functions to:", args.funcs)
            funcs_file.write(dill.dumps(funcs))

        with open(args.names, "wb") as names_file:
            print("Saving public entry names to:", args.names)
            names_file.write(dill.dumps(list(names)))

    elif args.command == "check":
        if args.gadget is not None:
            with Timer("Building the {} circuit...".format(args.gadget)):
                circuit = build(args.gadget)
            skeys = list(circuit.stmts.keys())
            gates = circuit.gates
            funcs = circuit.funcs
            names = list(circuit.stmts.values())
        elif args.gates is not None and args.funcs is not None and args.names is not None:
            with open(args.gates, "rb") as gates_file:
                print("Loading constraints from:", args.gates)
                wire_count, skeys, gates = dill.loads(gates_file.read())
            with open(args.funcs, "rb") as funcs_file:
                print("Loading witness generation functions from:", args.funcs)
                funcs = dill.loads(funcs_file.read())
            with open(args.names, "rb") as names_file:
                print("Loading public entry names from:", args.names)
                names = dill.loads(names_file.read())
        else:
            raise ValueError("--gates, --funcs and --names must be provided for checking if the gadget is not given.")

        with Timer("Generating witness..."):
            witness = Witness(funcs, args.args)

        with Timer("Checking constraints..."):
            witness.check(gates)

        print("Constraints satisfied!")
        print("Public entries:", "{" + ", ".join(f"{k} = {witness.vec[m]}" for m, k in zip(skeys, names, strict=True)) + "}")

    elif args.command == "sgn0":
        result = evaluate("sgn0", {"x.re": args.re, "x.im": args.im})
        expect = native.sgn0(FQ2([args.re, args.im]))
        print("sgn0 in circuit:", result)
        print("sgn0 native:", expect)
        if result != expect:
            raise AssertionError("sgn0 mismatch")

    elif args.command == "mod2":
        result = evaluate("mod2", {"x": args.x})
        expect = native.mod2(FQ(args.x))
        print("mod2 in circuit:", result)
        print("mod2 native:", expect)
        if result != expect:
            raise AssertionError("mod2 mismatch")


if __name__ == "__main__":
    main()
