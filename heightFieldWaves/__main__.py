# -- heightFieldWaves CLI -- #

'''Allows `python -m heightFieldWaves`.'''

from heightFieldWaves.runner import main

main()
