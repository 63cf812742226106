from .properties import Property
from .prices import PropertyPrice
from .contracts import RentalContract, SaleContract
