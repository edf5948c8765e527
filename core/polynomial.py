from typing import List, Sequence

from core.complex import Complex


class ComplexPolynomial:
    """Polynomial in coefficient form, factors[i] is the coefficient of z^i."""

    def __init__(self, *factors: Complex):
        if any(factor is None for factor in factors):
            raise TypeError("Polynomial factors cannot be None.")
        self.factors = tuple(factors)

    def order(self) -> int:
        return len(self.factors) - 1

    def multiply(self, other: "ComplexPolynomial") -> "ComplexPolynomial":
        if other is None:
            raise TypeError("Polynomial operand cannot be None.")
        if not self.factors or not other.factors:
            return ComplexPolynomial()

        product = [Complex.ZERO] * (len(self.factors) + len(other.factors) - 1)
        for i, a in enumerate(self.factors):
            for j, b in enumerate(other.factors):
                product[i + j] = product[i + j] + a * b
        return ComplexPolynomial(*product)

    def derive(self) -> "ComplexPolynomial":
        derivative = [self.factors[i] * Complex(i, 0) for i in range(1, len(self.factors))]
        return ComplexPolynomial(*derivative)

    def apply(self, z: Complex) -> Complex:
        if z is None:
            raise TypeError("Polynomial argument cannot be None.")
        # Horner
        result = Complex.ZERO
        for factor in reversed(self.factors):
            result = result * z + factor
        return result

    def __str__(self):
        if not self.factors:
            return "f(z) = 0"
        terms = []
        for i in range(len(self.factors) - 1, -1, -1):
            term = f"({self.factors[i]})"
            if i > 0:
                term += "z"
            if i > 1:
                term += f"^{i}"
            terms.append(term)
        return "f(z) = " + "+".join(terms)

    def __repr__(self):
        return f"ComplexPolynomial({', '.join(repr(f) for f in self.factors)})"


class ComplexRootedPolynomial:
    """Polynomial given as the product of linear factors (z - roots[i])."""

    def __init__(self, *roots: Complex):
        if not roots:
            raise ValueError("At least a single root must be provided, roots provided: 0")
        if any(root is None for root in roots):
            raise TypeError("Polynomial roots cannot be None.")
        self.roots = tuple(roots)

    def apply(self, z: Complex) -> Complex:
        if z is None:
            raise TypeError("Polynomial argument cannot be None.")
        result = Complex.ONE
        for root in self.roots:
            result = result * (z - root)
        return result

    def to_complex_polynomial(self) -> ComplexPolynomial:
        coefficients = [self.roots[0].negate(), Complex.ONE]
        for root in self.roots[1:]:
            coefficients = _multiply_linear_factor(coefficients, root)
        return ComplexPolynomial(*coefficients)

    def index_of_closest_root_for(self, z: Complex, threshold: float) -> int:
        """Index of the nearest root no further than threshold from z, or -1."""
        if z is None:
            raise TypeError("Complex argument cannot be None.")

        minimum_distance = float("inf")
        closest_index = -1
        for i, root in enumerate(self.roots):
            distance = (z - root).module()
            if distance <= threshold and distance < minimum_distance:
                minimum_distance = distance
                closest_index = i
        return closest_index

    def __str__(self):
        return "f(z) = " + "*".join(f"(z-({root}))" for root in self.roots)

    def __repr__(self):
        return f"ComplexRootedPolynomial({', '.join(repr(r) for r in self.roots)})"


def _multiply_linear_factor(base: Sequence[Complex], root: Complex) -> List[Complex]:
    # (b0 + b1 z + ... + bn z^n) * (z - root)
    result = [None] * (len(base) + 1)
    result[0] = (base[0] * root).negate()
    for i in range(1, len(base)):
        result[i] = base[i - 1] - base[i] * root
    result[len(base)] = base[-1]
    return result
