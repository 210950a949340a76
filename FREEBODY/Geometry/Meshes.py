''' Factory functions for common closed meshes '''
from FREEBODY.Geometry.Solids import Mesh
from FREEBODY.Motion import Vector

__all__ = [ "createBox", "createCube", "createPyramid" ]

def createBox(sizeX, sizeY, sizeZ):
    ''' Rectangular box centered at the origin, built from six outward-facing panels '''
    mesh = Mesh()
    mesh.addPanel(Vector(0, sizeY/2, 0), Vector.unitX(), sizeX, sizeZ)
    mesh.addPanel(Vector(0, -sizeY/2, 0), Vector.unitX(), sizeX, sizeZ)
    mesh.addPanel(Vector(sizeX/2, 0, 0), Vector.unitZ(), sizeZ, sizeY)
    mesh.addPanel(Vector(-sizeX/2, 0, 0), Vector.unitZ(), sizeZ, sizeY)
    mesh.addPanel(Vector(0, 0, sizeZ/2), Vector.unitX(), sizeX, sizeY)
    mesh.addPanel(Vector(0, 0, -sizeZ/2), Vector.unitX(), sizeX, sizeY)
    return mesh

def createCube(size):
    return createBox(size, size, size)

def createPyramid(side, height):
    ''' Square pyramid: base centered on the origin in the XY plane, apex at (0, 0, height) '''
    mesh = Mesh()
    half = side / 2
    base = mesh.addNodes([
        Vector(-half, -half, 0),
        Vector(half, -half, 0),
        Vector(half, half, 0),
        Vector(-half, half, 0)
    ])
    apex = mesh.addNode(Vector(0, 0, height))

    # Base faces -Z
    mesh.addFace(*reversed(base))
    for i in range(4):
        mesh.addFace(apex, base[i], base[(i+1) % 4])

    return mesh
