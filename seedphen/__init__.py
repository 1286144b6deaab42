"""seedphen: seed germination and dispersal timing from hourly forcing.

Implements the two seed-stage models of Burghardt et al. (2015),
"Modeling the influence of genetic and environmental variation on the
expression of plant life cycles across landscapes", The American
Naturalist 185(2):212-227:
  - Hydrothermal-time germination with afterripening across a
    population of dormancy classes
  - Thermal-time dispersal from flowering
"""

__version__ = "0.1.0"
