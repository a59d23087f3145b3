from dataclasses import dataclass


@dataclass
class PassSearchConfig:
    refine_tol_s : float = 1.0 # bisection and golden section stop at this bracket width

    max_bisection_iter : int = 64 # caps guarantee termination, running out is an error
    max_golden_iter : int = 100

    apply_refraction : bool = False # search on apparent instead of geometric elevation

    def __post_init__(self):
        if self.refine_tol_s <= 0.0:
            raise ValueError(f"refine_tol_s must be positive, got {self.refine_tol_s}")
        if self.max_bisection_iter < 1 or self.max_golden_iter < 1:
            raise ValueError("iteration caps must be at least 1")
