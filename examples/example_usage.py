import sys
import os
# Add the project root to Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
from exprparse import Expression, Status, ErrorPolicy, LogLevel, configure_logging, create_variable


def projectile_height():
  """Evaluate one compiled expression over a sweep of times"""
  t = create_variable(0.0)
  v0 = create_variable(20.0)

  expr = Expression()
  expr.register_variable("t", t)
  expr.register_variable("v0", v0)
  expr.register_function("sq", lambda x: x * x)

  status = expr.parse("v0*t - 9.81*sq(t)/2")
  if status is not Status.SUCCESS:
    print(f"Parse failed: {status.name}")
    return

  print(f"Compiled: {expr.to_string()}")
  print(f"SymPy:    {expr.to_sympy()}")
  for time in np.linspace(0.0, 4.0, 5):
    t.set(time)
    height, status = expr.evaluate()
    print(f"  t={time:.1f}s  h={height:8.3f}m  ({status.name})")


def division_policies():
  """Compare how a division by zero is reported under each policy"""
  for policy in ErrorPolicy:
    expr = Expression(error_policy=policy)
    expr.parse("1/0 + 5")
    value, status = expr.evaluate()
    print(f"  {policy.value:<16} value={value:g} status={status.name}")


if __name__ == "__main__":
  configure_logging(LogLevel.MODERATE)
  print("Projectile height:")
  projectile_height()
  print("\nDivision by zero:")
  division_policies()
