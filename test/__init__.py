'''
Contains all of the test code to make sure the code in `FREEBODY` is running properly.
Directory structure mirrors that of FREEBODY, with additional data directories.

All test/test_XXXX modules contain unit testing code for FREEBODY/XXXX.
Test simulation definitions are in test/test_IO and FREEBODY/Examples/Simulations
'''
