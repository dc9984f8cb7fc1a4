'''Interchangeable building blocks used by the tallies.'''
